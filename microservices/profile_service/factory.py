"""
Profile Service Factory

Factory for creating ProfileService with real dependencies.
This is the ONLY module that imports concrete implementations.
"""

import logging
from typing import Optional

from core.config_manager import ConfigManager
from core.document_store import DocumentStore

from .profile_repository import ProfileRepository
from .profile_service import ProfileService

logger = logging.getLogger(__name__)


def create_profile_service(
    store: DocumentStore,
    config: Optional[ConfigManager] = None,
    event_bus=None,
) -> ProfileService:
    """
    Create ProfileService with all real dependencies

    Args:
        store: Document store backing the ``users`` collection
        config: Optional config manager (creates default if not provided)
        event_bus: Optional event bus for event publishing

    Returns:
        ProfileService instance
    """
    if config is None:
        config = ConfigManager("profile_service")

    repository = ProfileRepository(
        store=store,
        operation_timeout=config.campus.operation_timeout_seconds,
    )

    logger.info("ProfileService created with real dependencies")

    return ProfileService(
        repository=repository,
        event_bus=event_bus,
    )


__all__ = ["create_profile_service"]
