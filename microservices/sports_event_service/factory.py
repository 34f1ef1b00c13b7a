"""
Sports Event Service Factory

Factory for creating SportsEventService with real dependencies.
This is the ONLY module that imports concrete implementations.
"""

import logging
from typing import Optional

from core.config_manager import ConfigManager
from core.document_store import DocumentStore

from .protocols import ChatNotifierProtocol, DisplayNameResolverProtocol
from .sports_event_repository import SportsEventRepository
from .sports_event_service import SportsEventService

logger = logging.getLogger(__name__)


def create_sports_event_repository(
    store: DocumentStore,
    config: Optional[ConfigManager] = None,
) -> SportsEventRepository:
    if config is None:
        config = ConfigManager("sports_event_service")
    return SportsEventRepository(
        store=store,
        operation_timeout=config.campus.operation_timeout_seconds,
    )


def create_sports_event_service(
    store: DocumentStore,
    name_resolver: DisplayNameResolverProtocol,
    chat: Optional[ChatNotifierProtocol] = None,
    config: Optional[ConfigManager] = None,
    event_bus=None,
    repository: Optional[SportsEventRepository] = None,
) -> SportsEventService:
    """
    Create SportsEventService with all real dependencies

    Args:
        store: Document store backing the ``events`` collection
        name_resolver: Display-name lookup (profile service)
        chat: Chat service receiving system notices
        config: Optional config manager (creates default if not provided)
        event_bus: Optional event bus for event publishing
        repository: Share an existing repository (e.g. with the chat service)

    Returns:
        SportsEventService instance
    """
    if config is None:
        config = ConfigManager("sports_event_service")

    if repository is None:
        repository = create_sports_event_repository(store, config)

    logger.info("SportsEventService created with real dependencies")

    return SportsEventService(
        repository=repository,
        name_resolver=name_resolver,
        chat=chat,
        event_bus=event_bus,
        policy=config.campus,
    )


__all__ = ["create_sports_event_repository", "create_sports_event_service"]
