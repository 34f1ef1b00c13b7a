"""
Authentication Service Event Publishers
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from core.nats_client import Event, EventType, ServiceSource

from .models import UserAuthEvent

logger = logging.getLogger(__name__)


async def publish_user_auth_event(
    event_bus,
    event_type: EventType,
    user_id: str,
    email: Optional[str] = None,
):
    """Publish user.signed_up / user.signed_in / user.signed_out"""
    if not event_bus:
        return

    try:
        payload = UserAuthEvent(
            user_id=user_id,
            email=email,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        event = Event(
            event_type=event_type,
            source=ServiceSource.AUTH_SERVICE,
            data=payload.model_dump(),
        )
        await event_bus.publish_event(event)
        logger.info(f"Published {event_type.value} for {user_id}")

    except Exception as e:
        logger.error(f"Error publishing {event_type.value} event: {e}")
