"""
Chat Service Event Publishers
"""

import logging
from datetime import datetime, timezone

from core.nats_client import Event, EventType, ServiceSource

from .models import ChatMessageSentEvent

logger = logging.getLogger(__name__)


async def publish_message_sent(event_bus, event_id: str, message_id: str, sender_id: str, kind):
    """Publish chat.message.sent"""
    if not event_bus:
        return

    try:
        payload = ChatMessageSentEvent(
            event_id=event_id,
            message_id=message_id,
            sender_id=sender_id,
            kind=getattr(kind, "value", kind),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        event = Event(
            event_type=EventType.CHAT_MESSAGE_SENT,
            source=ServiceSource.CHAT_SERVICE,
            data=payload.model_dump(),
            subject=event_id,
        )
        await event_bus.publish_event(event)
        logger.debug(f"Published chat.message.sent for {message_id}")

    except Exception as e:
        logger.error(f"Error publishing chat message event: {e}")
