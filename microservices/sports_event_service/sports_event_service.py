"""
Sports Event Service Business Logic

Event catalog: lifecycle rules and every mutation of an event's roster and
active flag. Guards run against the committed document inside one store
transaction, so concurrent writers get exactly one winner per transition.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from core.config import CampusConfig
from core.document_store import SERVER_TIMESTAMP, Subscription, TransactionWrite
from core.errors import CampusSportsError, ValidationError
from core.nats_client import EventType
from core.observable import Observable

from microservices.chat_service.models import MessageKind

from .events.publishers import (
    publish_event_created,
    publish_lifecycle_changed,
    publish_membership_changed,
)
from .models import EventCreateRequest, EventLookup, SportsEvent
from .protocols import (
    AlreadyJoinedError,
    ChatNotifierProtocol,
    CreatorCannotLeaveError,
    DisplayNameResolverProtocol,
    EventBusProtocol,
    EventClosedError,
    EventFullError,
    EventNotFoundError,
    NotAParticipantError,
    NotEventCreatorError,
    SportsEventRepositoryProtocol,
)

logger = logging.getLogger(__name__)


# System notice texts posted to the event chat
JOIN_NOTICE = "{name} joined the event"
LEAVE_NOTICE = "{name} left the event"
KICK_NOTICE = "{name} was removed from the event. Reason: {reason}"
CLOSE_NOTICE = "Event closed by organizer: {reason}"


def _require_text(value: str, field_name: str, label: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{label} is required", code="invalid_field", field=field_name)
    return value


def _require_event(event: Optional[SportsEvent], event_id: str) -> SportsEvent:
    if event is None:
        raise EventNotFoundError(f"Event {event_id} not found", event_id=event_id)
    return event


def _require_active(event: SportsEvent) -> None:
    if not event.is_active:
        raise EventClosedError("This event has been closed", event_id=event.id)


def _require_creator(event: SportsEvent, actor_identity: str, action: str) -> None:
    if event.created_by != actor_identity:
        raise NotEventCreatorError(f"Only the event creator can {action}", event_id=event.id)


class SportsEventService:
    """Event catalog core business logic"""

    def __init__(
        self,
        repository: SportsEventRepositoryProtocol,
        name_resolver: DisplayNameResolverProtocol,
        chat: Optional[ChatNotifierProtocol] = None,
        event_bus: Optional[EventBusProtocol] = None,
        policy: Optional[CampusConfig] = None,
    ):
        """
        Initialize sports event service with injected dependencies

        Args:
            repository: Repository for event documents
            name_resolver: Resolves creator/participant display names
            chat: Receives join/leave/kick/close notices
            event_bus: Optional event bus for publishing events
            policy: Capacity bounds (defaults to CampusConfig defaults)
        """
        self.repository = repository
        self.name_resolver = name_resolver
        self.chat = chat
        self.event_bus = event_bus
        self.policy = policy or CampusConfig()

        self.events: Observable[List[SportsEvent]] = Observable([], name="events")
        self._mirror: Optional[Subscription] = None

        logger.info("SportsEventService initialized with dependency injection")

    # ====================
    # Live catalog mirror
    # ====================

    async def start(self) -> Observable[List[SportsEvent]]:
        """Subscribe the ``events`` mirror (newest first); idempotent"""
        if self._mirror is None:
            self._mirror = await self.repository.watch_events(self.events.set)
            logger.info("Event catalog mirror started")
        return self.events

    def stop(self) -> None:
        """Release the mirror subscription; safe when not started"""
        if self._mirror is not None:
            self._mirror.unsubscribe()
            self._mirror = None
            logger.info("Event catalog mirror stopped")

    @property
    def is_started(self) -> bool:
        return self._mirror is not None

    async def get_event(self, event_id: str) -> EventLookup:
        event = await self.repository.get_event(event_id)
        return EventLookup(event_id=event_id, event=event)

    # ====================
    # Creation
    # ====================

    def _validate_capacity(self, value: int) -> None:
        low, high = self.policy.min_participants, self.policy.max_participants
        if not isinstance(value, int) or isinstance(value, bool) or not low <= value <= high:
            raise ValidationError(
                f"Max participants must be between {low} and {high}",
                code="invalid_field",
                field="max_participants",
            )

    async def create_event(self, request: EventCreateRequest, creator_identity: str) -> str:
        """Create an open event with the creator as the only participant"""
        title = _require_text(request.title, "title", "Title")
        sport = _require_text(request.sport, "sport", "Sport")
        location = _require_text(request.location, "location", "Location")
        date = _require_text(request.date, "date", "Date")
        time = _require_text(request.time, "time", "Time")
        self._validate_capacity(request.max_participants)

        creator_name = await self.name_resolver.resolve_display_name(creator_identity)

        data = {
            "title": title,
            "sport": sport,
            "location": location,
            "date": date,
            "time": time,
            "max_participants": request.max_participants,
            "participant_ids": [creator_identity],
            "participant_names": {creator_identity: creator_name},
            "created_by": creator_identity,
            "created_by_name": creator_name,
            "created_at": SERVER_TIMESTAMP,
            "description": request.description,
            "difficulty": request.difficulty.value,
            "is_active": True,
            "closed_reason": None,
            "closed_at": None,
            "kicked": [],
        }
        event_id = await self.repository.create_event(data)
        logger.info(f"Event {event_id} '{title}' created by {creator_identity}")

        await publish_event_created(
            self.event_bus, event_id, title, sport, creator_identity, request.max_participants
        )
        return event_id

    # ====================
    # Membership
    # ====================

    async def join_event(self, event_id: str, identity: str) -> SportsEvent:
        """Add identity to the roster if the event is open, not full and not joined"""
        name = await self.name_resolver.resolve_display_name(identity)

        def decide(event: Optional[SportsEvent]) -> TransactionWrite:
            event = _require_event(event, event_id)
            _require_active(event)
            if identity in event.participant_ids:
                raise AlreadyJoinedError("You have already joined this event", event_id=event_id)
            if len(event.participant_ids) >= event.max_participants:
                raise EventFullError("This event is full", event_id=event_id)
            return TransactionWrite.update({
                "participant_ids": event.participant_ids + [identity],
                "participant_names": {**event.participant_names, identity: name},
            })

        try:
            _, after = await self.repository.mutate_event(event_id, decide)
        except CampusSportsError as e:
            logger.warning(f"Join rejected for {identity} on {event_id}: {e.code}")
            raise
        logger.info(f"{identity} joined event {event_id} ({len(after.participant_ids)}/{after.max_participants})")

        await self._notify_chat(event_id, identity, MessageKind.SYSTEM_JOIN, JOIN_NOTICE.format(name=name))
        await publish_membership_changed(
            self.event_bus, EventType.SPORTS_EVENT_JOINED, event_id, identity, name, len(after.participant_ids)
        )
        return after

    async def leave_event(self, event_id: str, identity: str) -> SportsEvent:
        """Remove identity from the roster; the creator cannot leave"""

        def decide(event: Optional[SportsEvent]) -> TransactionWrite:
            event = _require_event(event, event_id)
            _require_active(event)
            if identity not in event.participant_ids:
                raise NotAParticipantError("You are not a participant of this event", event_id=event_id)
            if identity == event.created_by:
                raise CreatorCannotLeaveError(
                    "The organizer cannot leave; close or cancel the event instead", event_id=event_id
                )
            names = dict(event.participant_names)
            names.pop(identity, None)
            return TransactionWrite.update({
                "participant_ids": [p for p in event.participant_ids if p != identity],
                "participant_names": names,
            })

        try:
            before, after = await self.repository.mutate_event(event_id, decide)
        except CampusSportsError as e:
            logger.warning(f"Leave rejected for {identity} on {event_id}: {e.code}")
            raise
        name = before.display_name_of(identity)
        logger.info(f"{identity} left event {event_id}")

        await self._notify_chat(event_id, identity, MessageKind.SYSTEM_LEAVE, LEAVE_NOTICE.format(name=name))
        await publish_membership_changed(
            self.event_bus, EventType.SPORTS_EVENT_LEFT, event_id, identity, name, len(after.participant_ids)
        )
        return after

    async def kick_participant(
        self, event_id: str, actor_identity: str, target_identity: str, reason: str
    ) -> SportsEvent:
        """Creator removes a participant with a reason; recorded in ``kicked``"""
        reason = _require_text(reason, "reason", "A reason")
        if actor_identity == target_identity:
            raise ValidationError(
                "You cannot remove yourself; close or cancel the event instead",
                code="cannot_kick_self",
                field="target_identity",
            )

        def decide(event: Optional[SportsEvent]) -> TransactionWrite:
            event = _require_event(event, event_id)
            _require_creator(event, actor_identity, "remove participants")
            _require_active(event)
            if target_identity not in event.participant_ids:
                raise NotAParticipantError("That user is not a participant of this event", event_id=event_id)
            names = dict(event.participant_names)
            target_name = names.pop(target_identity, None) or target_identity
            record = {
                "user_id": target_identity,
                "user_name": target_name,
                "reason": reason,
                "kicked_at": datetime.now(timezone.utc),
            }
            return TransactionWrite.update({
                "participant_ids": [p for p in event.participant_ids if p != target_identity],
                "participant_names": names,
                "kicked": [k.model_dump() for k in event.kicked] + [record],
            })

        try:
            before, after = await self.repository.mutate_event(event_id, decide)
        except CampusSportsError as e:
            logger.warning(f"Kick of {target_identity} by {actor_identity} on {event_id} rejected: {e.code}")
            raise
        name = before.display_name_of(target_identity)
        logger.info(f"{target_identity} removed from event {event_id} by {actor_identity}")

        await self._notify_chat(
            event_id, target_identity, MessageKind.SYSTEM_KICK, KICK_NOTICE.format(name=name, reason=reason)
        )
        await publish_membership_changed(
            self.event_bus,
            EventType.SPORTS_EVENT_KICKED,
            event_id,
            target_identity,
            name,
            len(after.participant_ids),
            actor_id=actor_identity,
            reason=reason,
        )
        return after

    # ====================
    # Lifecycle
    # ====================

    async def close_event(self, event_id: str, actor_identity: str, reason: str) -> SportsEvent:
        """Creator closes the event; the record stays visible in history"""
        reason = _require_text(reason, "reason", "A reason")

        def decide(event: Optional[SportsEvent]) -> TransactionWrite:
            event = _require_event(event, event_id)
            _require_creator(event, actor_identity, "close this event")
            _require_active(event)
            return TransactionWrite.update({
                "is_active": False,
                "closed_reason": reason,
                "closed_at": SERVER_TIMESTAMP,
            })

        try:
            _, after = await self.repository.mutate_event(event_id, decide)
        except CampusSportsError as e:
            logger.warning(f"Close of {event_id} by {actor_identity} rejected: {e.code}")
            raise
        logger.info(f"Event {event_id} closed by {actor_identity}: {reason}")

        await self._notify_chat(event_id, None, MessageKind.SYSTEM_LEAVE, CLOSE_NOTICE.format(reason=reason))
        await publish_lifecycle_changed(
            self.event_bus, EventType.SPORTS_EVENT_CLOSED, event_id, actor_identity, reason=reason
        )
        return after

    async def cancel_event(self, event_id: str, actor_identity: str) -> None:
        """Creator permanently deletes the event (open or closed); chat history is kept"""

        def decide(event: Optional[SportsEvent]) -> TransactionWrite:
            event = _require_event(event, event_id)
            _require_creator(event, actor_identity, "cancel this event")
            return TransactionWrite.remove()

        try:
            await self.repository.mutate_event(event_id, decide)
        except CampusSportsError as e:
            logger.warning(f"Cancel of {event_id} by {actor_identity} rejected: {e.code}")
            raise
        logger.info(f"Event {event_id} cancelled by {actor_identity}")

        await publish_lifecycle_changed(self.event_bus, EventType.SPORTS_EVENT_CANCELLED, event_id, actor_identity)

    async def update_max_participants(self, event_id: str, actor_identity: str, new_max: int) -> SportsEvent:
        """Creator changes capacity; never below the current roster size"""
        self._validate_capacity(new_max)

        def decide(event: Optional[SportsEvent]) -> TransactionWrite:
            event = _require_event(event, event_id)
            _require_creator(event, actor_identity, "change the capacity")
            _require_active(event)
            if new_max < len(event.participant_ids):
                raise ValidationError(
                    f"Max participants cannot be below the current {len(event.participant_ids)} participants",
                    code="capacity_below_roster",
                    field="max_participants",
                )
            return TransactionWrite.update({"max_participants": new_max})

        try:
            _, after = await self.repository.mutate_event(event_id, decide)
        except CampusSportsError as e:
            logger.warning(f"Capacity update of {event_id} by {actor_identity} rejected: {e.code}")
            raise
        logger.info(f"Event {event_id} capacity set to {new_max} by {actor_identity}")

        await publish_lifecycle_changed(
            self.event_bus,
            EventType.SPORTS_EVENT_CAPACITY_UPDATED,
            event_id,
            actor_identity,
            max_participants=new_max,
        )
        return after

    # ====================
    # Helpers
    # ====================

    async def _notify_chat(
        self, event_id: str, subject_identity: Optional[str], kind: MessageKind, text: str
    ) -> None:
        """Post a system notice; the roster change is already committed, so failures are only logged"""
        if self.chat is None:
            return
        try:
            await self.chat.append_system_message(event_id, subject_identity, kind, text)
        except CampusSportsError as e:
            logger.error(f"Failed to post {kind.value} notice to event {event_id}: {e.message}")
