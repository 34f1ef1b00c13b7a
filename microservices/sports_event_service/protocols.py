"""
Sports Event Service Protocols

Defines interfaces for dependency injection and testing.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from core.document_store import Subscription, TransactionWrite
from core.errors import AuthorizationError, ConflictError, NotFoundError

from .models import SportsEvent

EventDecision = Callable[[Optional[SportsEvent]], Optional[TransactionWrite]]


# ====================
# Repository Protocol
# ====================


@runtime_checkable
class SportsEventRepositoryProtocol(Protocol):
    """Protocol for event document access"""

    async def create_event(self, data: Dict[str, Any]) -> str:
        """Create event document, returns id"""
        ...

    async def get_event(self, event_id: str) -> Optional[SportsEvent]:
        """Read one event"""
        ...

    async def mutate_event(
        self, event_id: str, decide: EventDecision
    ) -> Tuple[Optional[SportsEvent], Optional[SportsEvent]]:
        """Atomic read-check-write; returns (before, after)"""
        ...

    async def list_events(self) -> List[SportsEvent]:
        """All events, newest first"""
        ...

    async def watch_events(self, callback: Callable[[List[SportsEvent]], Any]) -> Subscription:
        """Live event list, newest first"""
        ...


# ====================
# Collaborator Protocols
# ====================


@runtime_checkable
class DisplayNameResolverProtocol(Protocol):
    """Resolves an identity to a display name; never raises"""

    async def resolve_display_name(self, identity: str) -> str:
        ...


@runtime_checkable
class ChatNotifierProtocol(Protocol):
    """Receives system notices for an event's chat"""

    async def append_system_message(
        self, event_id: str, subject_identity: Optional[str], kind: Any, text: str
    ) -> str:
        ...


@runtime_checkable
class EventBusProtocol(Protocol):
    """Protocol for event bus operations"""

    async def publish_event(self, event: Any) -> bool:
        ...


# ====================
# Custom Exceptions
# ====================


class EventNotFoundError(NotFoundError):
    """Raised when the event document does not exist"""
    default_code = "event_not_found"


class EventClosedError(ConflictError):
    """Raised when a closed event receives a roster or chat change"""
    default_code = "event_closed"


class AlreadyJoinedError(ConflictError):
    """Raised when an identity joins an event twice"""
    default_code = "already_joined"


class EventFullError(ConflictError):
    """Raised when the roster is at capacity"""
    default_code = "event_full"


class NotAParticipantError(ConflictError):
    """Raised when leaving or removing an identity not on the roster"""
    default_code = "not_a_participant"


class CreatorCannotLeaveError(ConflictError):
    """Raised when the creator tries to leave; they must close or cancel"""
    default_code = "creator_cannot_leave"


class NotEventCreatorError(AuthorizationError):
    """Raised when a non-creator attempts a management action"""
    default_code = "not_creator"


__all__ = [
    "EventDecision",
    "SportsEventRepositoryProtocol",
    "DisplayNameResolverProtocol",
    "ChatNotifierProtocol",
    "EventBusProtocol",
    "EventNotFoundError",
    "EventClosedError",
    "AlreadyJoinedError",
    "EventFullError",
    "NotAParticipantError",
    "CreatorCannotLeaveError",
    "NotEventCreatorError",
]
