"""
Chat Service Factory

Factory for creating ChatService with real dependencies.
This is the ONLY module that imports concrete implementations.
"""

import logging
from typing import Optional

from core.config_manager import ConfigManager
from core.document_store import DocumentStore

from .chat_repository import ChatRepository
from .chat_service import ChatService
from .protocols import DisplayNameResolverProtocol, EventReaderProtocol

logger = logging.getLogger(__name__)


def create_chat_service(
    store: DocumentStore,
    event_reader: EventReaderProtocol,
    name_resolver: DisplayNameResolverProtocol,
    config: Optional[ConfigManager] = None,
    event_bus=None,
) -> ChatService:
    """
    Create ChatService with all real dependencies

    Args:
        store: Document store backing the ``messages`` collection
        event_reader: Event repository used to authorize senders
        name_resolver: Display-name lookup (profile service)
        config: Optional config manager (creates default if not provided)
        event_bus: Optional event bus for event publishing

    Returns:
        ChatService instance
    """
    if config is None:
        config = ConfigManager("chat_service")

    repository = ChatRepository(
        store=store,
        operation_timeout=config.campus.operation_timeout_seconds,
    )

    logger.info("ChatService created with real dependencies")

    return ChatService(
        repository=repository,
        event_reader=event_reader,
        name_resolver=name_resolver,
        event_bus=event_bus,
    )


__all__ = ["create_chat_service"]
