"""
Sports Event Service

Event catalog: lifecycle rules, roster mutation and the live event list
"""

from . import projections
from .models import Difficulty, EventCreateRequest, EventLookup, EventState, KickRecord, SportsEvent
from .protocols import (
    AlreadyJoinedError,
    CreatorCannotLeaveError,
    EventClosedError,
    EventFullError,
    EventNotFoundError,
    NotAParticipantError,
    NotEventCreatorError,
)
from .sports_event_repository import SportsEventRepository
from .sports_event_service import SportsEventService

__all__ = [
    "SportsEventService",
    "SportsEventRepository",
    "SportsEvent",
    "EventCreateRequest",
    "EventLookup",
    "EventState",
    "Difficulty",
    "KickRecord",
    "projections",
    "EventNotFoundError",
    "EventClosedError",
    "AlreadyJoinedError",
    "EventFullError",
    "NotAParticipantError",
    "CreatorCannotLeaveError",
    "NotEventCreatorError",
]
