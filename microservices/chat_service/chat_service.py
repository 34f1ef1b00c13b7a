"""
Chat Service Business Logic

Per-event chat: posting is authorized against the event's current roster,
history is append-only and ordered by server timestamp.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from core.document_store import SERVER_TIMESTAMP, Subscription
from core.errors import ValidationError
from core.observable import Observable

from microservices.sports_event_service.protocols import EventClosedError, EventNotFoundError

from .events.publishers import publish_message_sent
from .models import SYSTEM_SENDER_ID, SYSTEM_SENDER_NAME, ChatMessage, MessageKind
from .protocols import (
    ChatNotAuthorizedError,
    ChatRepositoryProtocol,
    DisplayNameResolverProtocol,
    EventBusProtocol,
    EventReaderProtocol,
)

logger = logging.getLogger(__name__)


class ChatService:
    """Chat membership and messaging"""

    def __init__(
        self,
        repository: ChatRepositoryProtocol,
        event_reader: EventReaderProtocol,
        name_resolver: DisplayNameResolverProtocol,
        event_bus: Optional[EventBusProtocol] = None,
    ):
        """
        Initialize chat service with injected dependencies

        Args:
            repository: Repository for message documents
            event_reader: Reads the event document to authorize senders
            name_resolver: Fallback display-name lookup
            event_bus: Optional event bus for publishing events
        """
        self.repository = repository
        self.event_reader = event_reader
        self.name_resolver = name_resolver
        self.event_bus = event_bus

        self._streams: Dict[str, Tuple[Observable[List[ChatMessage]], Subscription]] = {}
        self._subscribe_locks: Dict[str, asyncio.Lock] = {}

        logger.info("ChatService initialized with dependency injection")

    # ====================
    # Live message streams
    # ====================

    async def subscribe(self, event_id: str) -> Observable[List[ChatMessage]]:
        """
        Live, timestamp-ordered messages for an event.

        Repeated calls return the same observable backed by a single store
        subscription.
        """
        lock = self._subscribe_locks.setdefault(event_id, asyncio.Lock())
        async with lock:
            if event_id in self._streams:
                return self._streams[event_id][0]

            stream: Observable[List[ChatMessage]] = Observable([], name=f"chat:{event_id}")
            subscription = await self.repository.watch_messages(event_id, stream.set)
            self._streams[event_id] = (stream, subscription)
            logger.info(f"Subscribed to chat for event {event_id}")
            return stream

    def unsubscribe(self, event_id: str) -> None:
        """Stop delivery for one event; safe when not subscribed"""
        self._subscribe_locks.pop(event_id, None)
        entry = self._streams.pop(event_id, None)
        if entry is None:
            return
        entry[1].unsubscribe()
        logger.info(f"Unsubscribed from chat for event {event_id}")

    def unsubscribe_all(self) -> None:
        for event_id in list(self._streams):
            self.unsubscribe(event_id)
        self._subscribe_locks.clear()

    def is_subscribed(self, event_id: str) -> bool:
        return event_id in self._streams

    async def get_messages(self, event_id: str) -> List[ChatMessage]:
        """Latest mirrored snapshot, or a one-off read when not subscribed"""
        entry = self._streams.get(event_id)
        if entry is not None:
            return list(entry[0].value)
        return await self.repository.list_messages(event_id)

    # ====================
    # Posting
    # ====================

    async def send_message(self, event_id: str, sender_identity: str, body: str) -> str:
        """Append a text message from a current participant of an active event"""
        text = (body or "").strip()
        if not text:
            raise ValidationError("Message cannot be empty", code="empty_message", field="body")

        event = await self.event_reader.get_event(event_id)
        if event is None:
            raise EventNotFoundError(f"Event {event_id} not found", event_id=event_id)
        if not event.is_active:
            raise EventClosedError("This event has been closed", event_id=event_id)
        if sender_identity not in event.participant_ids:
            logger.warning(f"{sender_identity} tried to post to event {event_id} without joining")
            raise ChatNotAuthorizedError("Only participants can post in this chat", event_id=event_id)

        sender_name = event.participant_names.get(sender_identity)
        if not sender_name:
            sender_name = await self.name_resolver.resolve_display_name(sender_identity)

        message_id = await self.repository.append_message({
            "event_id": event_id,
            "sender_id": sender_identity,
            "sender_name": sender_name,
            "body": text,
            "timestamp": SERVER_TIMESTAMP,
            "kind": MessageKind.TEXT.value,
            "subject_id": None,
        })
        logger.debug(f"Message {message_id} posted to event {event_id} by {sender_identity}")

        await publish_message_sent(self.event_bus, event_id, message_id, sender_identity, MessageKind.TEXT)
        return message_id

    async def append_system_message(
        self,
        event_id: str,
        subject_identity: Optional[str],
        kind: MessageKind,
        text: str,
    ) -> str:
        """Append a join/leave/kick/close notice; used by the event catalog"""
        if not kind.is_system:
            raise ValidationError("System messages need a system kind", code="invalid_field", field="kind")

        message_id = await self.repository.append_message({
            "event_id": event_id,
            "sender_id": SYSTEM_SENDER_ID,
            "sender_name": SYSTEM_SENDER_NAME,
            "body": text,
            "timestamp": SERVER_TIMESTAMP,
            "kind": kind.value,
            "subject_id": subject_identity,
        })
        logger.debug(f"System message {kind.value} posted to event {event_id}")

        await publish_message_sent(self.event_bus, event_id, message_id, SYSTEM_SENDER_ID, kind)
        return message_id
