"""
NATS JetStream Client for Campus Sports Services
Provides event-driven communication between services

This module wraps the nats-py client. Domain events are published to
JetStream streams keyed by subject prefix (``sports.*`` -> sports-stream,
``chat.*`` -> chat-stream, ...).
"""

import asyncio
import json
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

import nats
from nats.aio.client import Client as NATS
from nats.js import JetStreamContext

if TYPE_CHECKING:
    from core.config_manager import ConfigManager


class DecimalEncoder(json.JSONEncoder):
    """Custom JSON encoder that handles Decimal and datetime types"""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


logger = logging.getLogger(__name__)


class EventType(Enum):
    """Domain event types"""

    # Sports Event Events
    SPORTS_EVENT_CREATED = "sports.event.created"
    SPORTS_EVENT_JOINED = "sports.event.joined"
    SPORTS_EVENT_LEFT = "sports.event.left"
    SPORTS_EVENT_KICKED = "sports.event.kicked"
    SPORTS_EVENT_CLOSED = "sports.event.closed"
    SPORTS_EVENT_CANCELLED = "sports.event.cancelled"
    SPORTS_EVENT_CAPACITY_UPDATED = "sports.event.capacity_updated"

    # Chat Events
    CHAT_MESSAGE_SENT = "chat.message.sent"

    # Profile Events
    PROFILE_CREATED = "profile.created"
    PROFILE_UPDATED = "profile.updated"

    # Auth Events
    USER_SIGNED_UP = "user.signed_up"
    USER_SIGNED_IN = "user.signed_in"
    USER_SIGNED_OUT = "user.signed_out"


class ServiceSource(Enum):
    """Publishing services"""

    AUTH_SERVICE = "auth_service"
    PROFILE_SERVICE = "profile_service"
    SPORTS_EVENT_SERVICE = "sports_event_service"
    CHAT_SERVICE = "chat_service"


class Event:
    """Event model"""

    def __init__(
        self,
        event_type: EventType,
        source: ServiceSource,
        data: Dict[str, Any],
        subject: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ):
        self.id = str(uuid.uuid4())
        self.type = event_type.value
        self.source = source.value
        self.data = data
        self.subject = subject
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.metadata = metadata or {}
        self.version = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "source": self.source,
            "subject": self.subject,
            "timestamp": self.timestamp,
            "data": self.data,
            "metadata": self.metadata,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        event = cls.__new__(cls)
        event.id = data.get("id")
        event.type = data.get("type")
        event.source = data.get("source")
        event.subject = data.get("subject")
        event.timestamp = data.get("timestamp")
        event.data = data.get("data", {})
        event.metadata = data.get("metadata", {})
        event.version = data.get("version", "1.0.0")
        return event


class NATSEventBus:
    """
    NATS JetStream event bus.

    Publishing never raises: failures are logged and reported as ``False``
    so a broken bus cannot fail the operation that produced the event.
    """

    def __init__(
        self,
        service_name: str,
        config: Optional["ConfigManager"] = None,
        servers: Optional[str] = None,
    ):
        """
        Initialize NATS Event Bus.

        Args:
            service_name: Name of the service (used as the connection name)
            config: Optional ConfigManager instance for endpoint resolution
            servers: Explicit NATS URL, overrides config
        """
        from core.config_manager import ConfigManager

        self.service_name = service_name

        if config is None:
            config = ConfigManager(service_name)

        if servers:
            self.servers = servers
        elif config.infrastructure.nats_url:
            self.servers = config.infrastructure.nats_url
        else:
            host, port = config.discover_service(
                service_name="nats",
                default_host=config.infrastructure.nats_host,
                default_port=config.infrastructure.nats_port,
                env_host_key="NATS_HOST",
                env_port_key="NATS_PORT",
            )
            self.servers = f"nats://{host}:{port}"

        self._nc: Optional[NATS] = None
        self._js: Optional[JetStreamContext] = None
        self._subscriptions: Dict[str, Any] = {}  # pattern -> subscription
        self._known_streams: set = set()
        self._is_connected = False

        logger.info(f"NATS EventBus initialized: {self.servers}")

    async def connect(self):
        """Connect to NATS and open a JetStream context"""
        try:
            self._nc = await nats.connect(
                servers=self.servers,
                name=self.service_name,
            )
            self._js = self._nc.jetstream()
            self._is_connected = True
            logger.info(f"Connected to NATS as {self.service_name}")
        except Exception as e:
            logger.error(f"Failed to connect to NATS: {e}")
            raise

    async def _ensure_stream(self, subject: str) -> str:
        prefix = subject.split('.')[0]
        stream_name = self._get_stream_name_for_event(prefix)
        if stream_name in self._known_streams:
            return stream_name
        try:
            await self._js.add_stream(name=stream_name, subjects=[f"{prefix}.>"])
        except Exception as e:
            # Stream already exists with a compatible config
            logger.debug(f"Stream creation note: {e}")
        self._known_streams.add(stream_name)
        return stream_name

    async def publish_event(self, event: Event) -> bool:
        """
        Publish an event to NATS JetStream.

        The subject is the event type (e.g. ``sports.event.joined``); the
        stream is derived from its first segment.
        """
        if not self._is_connected or not self._js:
            logger.error("Not connected to NATS")
            return False

        try:
            subject = event.type
            data = json.dumps(event.to_dict(), cls=DecimalEncoder).encode()
            stream_name = await self._ensure_stream(subject)

            ack = await self._js.publish(
                subject,
                data,
                headers={"event_type": event.type, "source": event.source},
            )
            logger.info(f"Published event {event.type} [{event.id}] to stream {stream_name}, seq={ack.seq}")
            return True

        except Exception as e:
            logger.error(f"Error publishing event {event.id}: {e}")
            return False

    def _get_stream_name_for_event(self, event_type: str) -> str:
        """Map an event type prefix to its JetStream stream name"""
        prefix = event_type.split('.')[0]

        stream_mappings = {
            "sports": "sports-stream",
            "chat": "chat-stream",
            "profile": "profile-stream",
            "user": "user-stream",
        }

        return stream_mappings.get(prefix, f"{prefix}-stream")

    async def subscribe_to_events(
        self, pattern: str, handler: Callable, durable: Optional[str] = None
    ) -> Optional[str]:
        """
        Subscribe to events with a pattern using a JetStream push consumer.

        Args:
            pattern: Subject pattern to subscribe to (e.g., "sports.event.*")
            handler: Async callback receiving an Event
            durable: Optional durable name for the consumer
        """
        if not self._is_connected or not self._js:
            logger.error("Not connected to NATS")
            return None

        async def _on_message(msg):
            try:
                event = Event.from_dict(json.loads(msg.data.decode()))
                await handler(event)
                await msg.ack()
            except Exception as msg_e:
                logger.error(f"Error processing message on {msg.subject}: {msg_e}")

        try:
            await self._ensure_stream(pattern)
            sub = await self._js.subscribe(pattern, durable=durable, cb=_on_message)
            self._subscriptions[pattern] = sub
            logger.info(f"Subscribed to {pattern} (JetStream consumer)")
            return durable or pattern

        except Exception as e:
            logger.error(f"Error subscribing to events: {e}")
            return None

    async def unsubscribe(self, pattern: str) -> bool:
        """Unsubscribe from a pattern"""
        sub = self._subscriptions.pop(pattern, None)
        if sub is None:
            return False
        try:
            await sub.unsubscribe()
            logger.info(f"Unsubscribed from {pattern}")
            return True
        except Exception as e:
            logger.warning(f"Error unsubscribing from {pattern}: {e}")
            return False

    async def close(self):
        """Drain subscriptions and close the NATS connection"""
        for pattern in list(self._subscriptions.keys()):
            await self.unsubscribe(pattern)

        if self._nc:
            try:
                await asyncio.wait_for(self._nc.drain(), timeout=5)
            except Exception as e:
                logger.warning(f"NATS drain failed: {e}")
            self._nc = None
            self._js = None

        self._is_connected = False
        logger.info("Disconnected from NATS")

    @property
    def is_connected(self) -> bool:
        """Check if connected to NATS"""
        return self._is_connected


# Singleton instance
_event_bus: Optional[NATSEventBus] = None


async def get_event_bus(
    service_name: str,
    config: Optional["ConfigManager"] = None,
) -> NATSEventBus:
    """
    Get or create event bus instance.

    Args:
        service_name: Name of the service using the event bus
        config: Optional ConfigManager instance for endpoint resolution

    Returns:
        NATSEventBus instance
    """
    global _event_bus

    if _event_bus is None:
        _event_bus = NATSEventBus(service_name=service_name, config=config)
        await _event_bus.connect()

    return _event_bus


# Convenience function for creating events
def create_event(
    event_type: EventType,
    source: ServiceSource,
    data: Dict[str, Any],
    subject: Optional[str] = None,
    metadata: Optional[Dict[str, str]] = None,
) -> Event:
    """Create an Event instance"""
    return Event(
        event_type=event_type,
        source=source,
        data=data,
        subject=subject,
        metadata=metadata,
    )
