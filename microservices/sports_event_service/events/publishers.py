"""
Sports Event Service Event Publishers

Publishing failures are logged and never fail the catalog operation.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from core.nats_client import Event, EventType, ServiceSource

from .models import SportsEventCreatedEvent, SportsEventLifecycleEvent, SportsEventMembershipEvent

logger = logging.getLogger(__name__)


async def _publish(event_bus, event_type: EventType, data: dict, event_id: str):
    if not event_bus:
        logger.debug(f"Event bus not available, skipping {event_type.value}")
        return

    try:
        event = Event(
            event_type=event_type,
            source=ServiceSource.SPORTS_EVENT_SERVICE,
            data=data,
            subject=event_id,
        )
        await event_bus.publish_event(event)
        logger.info(f"Published {event_type.value} for event {event_id}")

    except Exception as e:
        logger.error(f"Error publishing {event_type.value} event: {e}")


async def publish_event_created(
    event_bus,
    event_id: str,
    title: str,
    sport: str,
    created_by: str,
    max_participants: int,
):
    """Publish sports.event.created"""
    payload = SportsEventCreatedEvent(
        event_id=event_id,
        title=title,
        sport=sport,
        created_by=created_by,
        max_participants=max_participants,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    await _publish(event_bus, EventType.SPORTS_EVENT_CREATED, payload.model_dump(), event_id)


async def publish_membership_changed(
    event_bus,
    event_type: EventType,
    event_id: str,
    user_id: str,
    user_name: str,
    participant_count: int,
    actor_id: Optional[str] = None,
    reason: Optional[str] = None,
):
    """Publish sports.event.joined / .left / .kicked"""
    payload = SportsEventMembershipEvent(
        event_id=event_id,
        user_id=user_id,
        user_name=user_name,
        participant_count=participant_count,
        actor_id=actor_id,
        reason=reason,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    await _publish(event_bus, event_type, payload.model_dump(), event_id)


async def publish_lifecycle_changed(
    event_bus,
    event_type: EventType,
    event_id: str,
    actor_id: str,
    reason: Optional[str] = None,
    max_participants: Optional[int] = None,
):
    """Publish sports.event.closed / .cancelled / .capacity_updated"""
    payload = SportsEventLifecycleEvent(
        event_id=event_id,
        actor_id=actor_id,
        reason=reason,
        max_participants=max_participants,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    await _publish(event_bus, event_type, payload.model_dump(), event_id)
