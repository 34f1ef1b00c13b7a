"""
Profile Service Event Publishers
"""

import logging
from datetime import datetime, timezone
from typing import List

from core.nats_client import Event, EventType, ServiceSource

from .models import ProfileCreatedEvent, ProfileUpdatedEvent

logger = logging.getLogger(__name__)


async def publish_profile_created(event_bus, user_id: str, full_name: str, email: str):
    """Publish profile.created"""
    if not event_bus:
        logger.debug("Event bus not available, skipping profile.created")
        return

    try:
        payload = ProfileCreatedEvent(
            user_id=user_id,
            full_name=full_name,
            email=email,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        event = Event(
            event_type=EventType.PROFILE_CREATED,
            source=ServiceSource.PROFILE_SERVICE,
            data=payload.model_dump(),
        )
        await event_bus.publish_event(event)
        logger.info(f"Published profile.created for {user_id}")

    except Exception as e:
        logger.error(f"Error publishing profile created event: {e}")


async def publish_profile_updated(event_bus, user_id: str, updated_fields: List[str]):
    """Publish profile.updated"""
    if not event_bus:
        logger.debug("Event bus not available, skipping profile.updated")
        return

    try:
        payload = ProfileUpdatedEvent(
            user_id=user_id,
            updated_fields=updated_fields,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        event = Event(
            event_type=EventType.PROFILE_UPDATED,
            source=ServiceSource.PROFILE_SERVICE,
            data=payload.model_dump(),
        )
        await event_bus.publish_event(event)
        logger.info(f"Published profile.updated for {user_id}")

    except Exception as e:
        logger.error(f"Error publishing profile updated event: {e}")
