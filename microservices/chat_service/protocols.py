"""
Chat Service Protocols

Defines interfaces for dependency injection and testing.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from core.document_store import Subscription
from core.errors import AuthorizationError

from microservices.sports_event_service.models import SportsEvent

from .models import ChatMessage


@runtime_checkable
class ChatRepositoryProtocol(Protocol):
    """Protocol for message document access"""

    async def append_message(self, data: Dict[str, Any]) -> str:
        """Append one message, returns id"""
        ...

    async def list_messages(self, event_id: str) -> List[ChatMessage]:
        """Messages of one event, oldest first"""
        ...

    async def watch_messages(
        self, event_id: str, callback: Callable[[List[ChatMessage]], Any]
    ) -> Subscription:
        """Live messages of one event, oldest first"""
        ...


@runtime_checkable
class EventReaderProtocol(Protocol):
    """Reads the committed event document for authorization"""

    async def get_event(self, event_id: str) -> Optional[SportsEvent]:
        ...


@runtime_checkable
class DisplayNameResolverProtocol(Protocol):
    async def resolve_display_name(self, identity: str) -> str:
        ...


@runtime_checkable
class EventBusProtocol(Protocol):
    async def publish_event(self, event: Any) -> bool:
        ...


class ChatNotAuthorizedError(AuthorizationError):
    """Raised when a non-participant posts to an event chat"""
    default_code = "not_participant"


__all__ = [
    "ChatRepositoryProtocol",
    "EventReaderProtocol",
    "DisplayNameResolverProtocol",
    "EventBusProtocol",
    "ChatNotAuthorizedError",
]
