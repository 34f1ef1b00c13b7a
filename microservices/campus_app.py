"""
Campus Sports Application

Composition root: one owned instance per process wires the document store,
the optional event bus and every service, and tears all live subscriptions
down on shutdown.

Usage:
    async with CampusSportsApp() as app:
        events = app.events.events.value
        await app.perform(lambda: app.events.join_event(event_id, uid), "Joined event")
"""

import logging
from typing import Awaitable, Callable, Optional, TypeVar

from core.action_state import ActionStateHolder
from core.config_manager import ConfigManager
from core.document_store import DocumentStore, InMemoryDocumentStore
from core.nats_client import NATSEventBus
from core.postgres_client import PostgresClientWrapper
from core.postgres_document_store import PostgresDocumentStore

from .auth_service.auth_service import AuthService
from .auth_service.factory import create_auth_service
from .auth_service.protocols import IdentityProviderProtocol
from .chat_service.chat_service import ChatService
from .chat_service.factory import create_chat_service
from .profile_service.factory import create_profile_service
from .profile_service.profile_service import ProfileService
from .sports_event_service.factory import create_sports_event_repository, create_sports_event_service
from .sports_event_service.sports_event_service import SportsEventService

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def create_document_store(config: ConfigManager) -> DocumentStore:
    """Build the configured store backend (``memory`` or ``postgres``)"""
    backend = config.campus.store_backend
    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "postgres":
        infra = config.infrastructure
        store = PostgresDocumentStore(
            PostgresClientWrapper(config.service_name),
            schema=infra.postgres_schema,
        )
        await store.initialize()
        return store
    raise ValueError(f"Unknown store backend: {backend!r}")


class CampusSportsApp:
    """Owns the store, event bus and services for one process"""

    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        store: Optional[DocumentStore] = None,
        identity: Optional[IdentityProviderProtocol] = None,
        event_bus=None,
    ):
        self.config = config or ConfigManager("campus_sports")
        self.store = store
        self.identity = identity
        self.event_bus = event_bus
        self._owns_event_bus = False

        self.profiles: Optional[ProfileService] = None
        self.chat: Optional[ChatService] = None
        self.events: Optional[SportsEventService] = None
        self.auth: Optional[AuthService] = None
        self.actions = ActionStateHolder(self.config.campus.action_result_ttl_seconds)
        self._initialized = False

    async def initialize(self) -> "CampusSportsApp":
        if self._initialized:
            return self

        if self.store is None:
            self.store = await create_document_store(self.config)

        if self.event_bus is None and self.config.campus.event_bus_enabled:
            bus = NATSEventBus(self.config.service_name, config=self.config)
            try:
                await bus.connect()
                self.event_bus = bus
                self._owns_event_bus = True
            except Exception as e:
                logger.warning(f"Event bus unavailable, continuing without it: {e}")

        self.profiles = create_profile_service(self.store, config=self.config, event_bus=self.event_bus)
        event_repository = create_sports_event_repository(self.store, config=self.config)
        self.chat = create_chat_service(
            self.store,
            event_reader=event_repository,
            name_resolver=self.profiles,
            config=self.config,
            event_bus=self.event_bus,
        )
        self.events = create_sports_event_service(
            self.store,
            name_resolver=self.profiles,
            chat=self.chat,
            config=self.config,
            event_bus=self.event_bus,
            repository=event_repository,
        )

        if self.identity is not None or self.config.campus.identity_api_key:
            self.auth = create_auth_service(
                self.profiles, config=self.config, event_bus=self.event_bus, identity=self.identity
            )
            self.identity = self.auth.identity
            await self.auth.initialize()
        else:
            logger.warning("No identity provider configured; authentication disabled")

        await self.events.start()
        self._initialized = True
        logger.info(f"CampusSportsApp initialized ({self.config.campus.store_backend} store)")
        return self

    async def perform(self, operation: Callable[[], Awaitable[T]], success_message: str) -> T:
        """Run a user action through the shared action-result state"""
        return await self.actions.run(operation, success_message)

    async def shutdown(self) -> None:
        """Release every live subscription and close backends"""
        if self.events is not None:
            self.events.stop()
        if self.chat is not None:
            self.chat.unsubscribe_all()
        if self.profiles is not None:
            self.profiles.stop_watching()
        self.actions.close()

        close_identity = getattr(self.identity, "close", None)
        if close_identity is not None:
            await close_identity()
        if self.store is not None:
            await self.store.close()
        if self.event_bus is not None and self._owns_event_bus:
            await self.event_bus.close()

        self._initialized = False
        logger.info("CampusSportsApp shut down")

    async def __aenter__(self) -> "CampusSportsApp":
        return await self.initialize()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()
