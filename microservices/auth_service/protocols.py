"""
Authentication Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Optional, Protocol, runtime_checkable

from microservices.profile_service.models import ProfileCreateRequest, UserProfile

from .models import AuthUser


@runtime_checkable
class IdentityProviderProtocol(Protocol):
    """
    External identity service.

    Returns AuthUser on success; raises AuthorizationError (bad
    credentials), ConflictError (email taken) or IdentityProviderError.
    """

    @property
    def current_user(self) -> Optional[AuthUser]:
        ...

    async def sign_up(self, email: str, password: str) -> AuthUser:
        ...

    async def sign_in(self, email: str, password: str) -> AuthUser:
        ...

    async def sign_out(self) -> None:
        ...

    async def send_password_reset(self, email: str) -> None:
        ...


@runtime_checkable
class ProfileServiceProtocol(Protocol):
    """Profile operations needed around sign-up / sign-in"""

    async def create_profile(self, identity: str, request: ProfileCreateRequest) -> UserProfile:
        ...

    async def watch_profile(self, identity: str) -> Any:
        ...

    def stop_watching(self) -> None:
        ...


@runtime_checkable
class EventBusProtocol(Protocol):
    async def publish_event(self, event: Any) -> bool:
        ...
