"""
Profile Service Protocols

Defines interfaces for dependency injection and testing.
"""

from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from core.document_store import Subscription
from core.errors import AuthorizationError, ConflictError, NotFoundError

from .models import UserProfile


# ====================
# Repository Protocol
# ====================


@runtime_checkable
class ProfileRepositoryProtocol(Protocol):
    """Protocol for profile document access"""

    async def get_profile(self, identity: str) -> Optional[UserProfile]:
        """Read one profile"""
        ...

    async def create_profile(self, profile: UserProfile) -> UserProfile:
        """Create profile; fails if one exists for the identity"""
        ...

    async def update_profile(self, identity: str, changes: Dict[str, Any]) -> UserProfile:
        """Apply field changes to an existing profile"""
        ...

    async def watch_profile(
        self, identity: str, callback: Callable[[Optional[UserProfile]], Any]
    ) -> Subscription:
        """Live profile updates (None when absent)"""
        ...


@runtime_checkable
class EventBusProtocol(Protocol):
    """Protocol for event bus operations"""

    async def publish_event(self, event: Any) -> bool:
        ...


# ====================
# Custom Exceptions
# ====================


class ProfileNotFoundError(NotFoundError):
    """Raised when no profile exists for an identity"""
    default_code = "profile_not_found"


class ProfileAlreadyExistsError(ConflictError):
    """Raised when a profile is created twice for one identity"""
    default_code = "profile_exists"


class NotProfileOwnerError(AuthorizationError):
    """Raised when someone other than the owner edits a profile"""
    default_code = "not_profile_owner"


__all__ = [
    "ProfileRepositoryProtocol",
    "EventBusProtocol",
    "ProfileNotFoundError",
    "ProfileAlreadyExistsError",
    "NotProfileOwnerError",
]
