"""
Event View Projections

Pure functions over event snapshots used by the presentation layer.
"""

from typing import Iterable, List, Optional

from .constants import ALL_SPORTS_FILTER
from .models import EventState, SportsEvent


def participant_count(event: SportsEvent) -> int:
    return len(event.participant_ids)


def spots_remaining(event: SportsEvent) -> int:
    return max(0, event.max_participants - participant_count(event))


def is_full(event: SportsEvent) -> bool:
    return participant_count(event) >= event.max_participants


def is_event_closed(event: SportsEvent) -> bool:
    return not event.is_active


def is_user_in_event(event: SportsEvent, identity: Optional[str]) -> bool:
    return identity is not None and identity in event.participant_ids


def event_state(event: Optional[SportsEvent]) -> EventState:
    """Lifecycle state; a missing snapshot is DELETED"""
    if event is None:
        return EventState.DELETED
    if not event.is_active:
        return EventState.CLOSED
    if is_full(event):
        return EventState.FULL
    return EventState.OPEN


def filter_by_sport(events: Iterable[SportsEvent], sport: str) -> List[SportsEvent]:
    """Events for one sport; "All" keeps every event"""
    if sport == ALL_SPORTS_FILTER:
        return list(events)
    return [e for e in events if e.sport == sport]


def open_events(events: Iterable[SportsEvent]) -> List[SportsEvent]:
    """Browse list: active events only"""
    return [e for e in events if e.is_active]


def my_events(
    events: Iterable[SportsEvent], identity: Optional[str], include_created: bool = False
) -> List[SportsEvent]:
    """
    Events the identity participates in.

    With ``include_created`` the creator's own events are kept even when
    they are no longer on the roster. Closed events are kept.
    """
    if identity is None:
        return []
    return [
        e for e in events
        if identity in e.participant_ids or (include_created and e.created_by == identity)
    ]


def events_i_created(events: Iterable[SportsEvent], identity: Optional[str]) -> List[SportsEvent]:
    if identity is None:
        return []
    return [e for e in events if e.created_by == identity]
