"""
Authentication Service Business Logic

Sign-up / sign-in policy in front of the identity provider, and the
observable auth state consumed by the UI. Sign-up also creates the
profile; sign-in starts the live profile watch and sign-out releases it.
"""

import logging
from typing import Optional

from core.config import CampusConfig
from core.errors import CampusSportsError, ValidationError
from core.nats_client import EventType
from core.observable import Observable

from microservices.profile_service.models import ProfileCreateRequest

from .events.publishers import publish_user_auth_event
from .models import AuthState, AuthStatus, AuthUser, SignInRequest, SignUpRequest
from .protocols import EventBusProtocol, IdentityProviderProtocol, ProfileServiceProtocol

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication state holder and sign-up policy"""

    def __init__(
        self,
        identity: IdentityProviderProtocol,
        profiles: ProfileServiceProtocol,
        event_bus: Optional[EventBusProtocol] = None,
        policy: Optional[CampusConfig] = None,
    ):
        self.identity = identity
        self.profiles = profiles
        self.event_bus = event_bus
        self.policy = policy or CampusConfig()
        self.state: Observable[AuthState] = Observable(AuthState.loading(), name="auth_state")

        logger.info("AuthService initialized with dependency injection")

    @property
    def current_user(self) -> Optional[AuthUser]:
        return self.identity.current_user

    async def initialize(self) -> AuthState:
        """Resolve the initial state from the provider's current session"""
        user = self.current_user
        if user is not None:
            await self.profiles.watch_profile(user.uid)
            self.state.set(AuthState.authenticated(user))
        else:
            self.state.set(AuthState.unauthenticated())
        return self.state.value

    # ====================
    # Validation
    # ====================

    def _normalize_email(self, email: str) -> str:
        email = (email or "").strip().lower()
        suffix = self.policy.student_email_suffix
        if not email.endswith(suffix):
            raise ValidationError(
                f"Please use your student email ({suffix})",
                code="invalid_email_domain",
                field="email",
            )
        return email

    def _validate_sign_up(self, request: SignUpRequest) -> str:
        email = self._normalize_email(request.email)
        if not request.full_name.strip():
            raise ValidationError("Please enter your full name", code="invalid_field", field="full_name")
        if request.password != request.confirm_password:
            raise ValidationError("Passwords do not match", code="password_mismatch", field="confirm_password")
        if len(request.password) < self.policy.password_min_length:
            raise ValidationError(
                f"Password must be at least {self.policy.password_min_length} characters",
                code="weak_password",
                field="password",
            )
        return email

    def _fail(self, error: CampusSportsError) -> None:
        self.state.set(AuthState.error(error.message, code=error.code))

    # ====================
    # Operations
    # ====================

    async def sign_up(self, request: SignUpRequest) -> AuthUser:
        """Create the account and its profile, then watch the profile"""
        try:
            email = self._validate_sign_up(request)
        except ValidationError as e:
            self._fail(e)
            raise

        self.state.set(AuthState.loading())
        try:
            user = await self.identity.sign_up(email, request.password)
        except CampusSportsError as e:
            logger.warning(f"Sign-up failed for {email}: {e.code}")
            self._fail(e)
            raise

        try:
            await self.profiles.create_profile(
                user.uid,
                ProfileCreateRequest(
                    full_name=request.full_name,
                    email=email,
                    major=request.major,
                    year=request.year,
                    favorite_sports=request.favorite_sports,
                    skill_level=request.skill_level,
                    bio=request.bio,
                ),
            )
            await self.profiles.watch_profile(user.uid)
        except CampusSportsError as e:
            logger.error(f"Account {user.uid} created but profile setup failed: {e.message}")
            self.state.set(AuthState.error(f"Account created but profile setup failed: {e.message}", code=e.code))
            raise

        self.state.set(AuthState.authenticated(user))
        logger.info(f"Signed up {email} as {user.uid}")
        await publish_user_auth_event(self.event_bus, EventType.USER_SIGNED_UP, user.uid, email)
        return user

    async def sign_in(self, request: SignInRequest) -> AuthUser:
        try:
            email = self._normalize_email(request.email)
            if not request.password:
                raise ValidationError("Please enter your password", code="invalid_field", field="password")
        except ValidationError as e:
            self._fail(e)
            raise

        self.state.set(AuthState.loading())
        try:
            user = await self.identity.sign_in(email, request.password)
            await self.profiles.watch_profile(user.uid)
        except CampusSportsError as e:
            logger.warning(f"Sign-in failed for {email}: {e.code}")
            self._fail(e)
            raise

        self.state.set(AuthState.authenticated(user))
        await publish_user_auth_event(self.event_bus, EventType.USER_SIGNED_IN, user.uid, email)
        return user

    async def sign_out(self) -> None:
        user = self.current_user
        self.profiles.stop_watching()
        await self.identity.sign_out()
        self.state.set(AuthState.unauthenticated())
        if user is not None:
            logger.info(f"Signed out {user.uid}")
            await publish_user_auth_event(self.event_bus, EventType.USER_SIGNED_OUT, user.uid, user.email)

    async def send_password_reset(self, email: str) -> None:
        try:
            email = self._normalize_email(email)
        except ValidationError as e:
            self._fail(e)
            raise

        self.state.set(AuthState.loading())
        try:
            await self.identity.send_password_reset(email)
        except CampusSportsError as e:
            logger.warning(f"Password reset failed for {email}: {e.code}")
            self._fail(e)
            raise
        self.state.set(AuthState.success(f"Password reset email sent to {email}"))

    def clear_error(self) -> None:
        """Leave ERROR/SUCCESS for AUTHENTICATED or UNAUTHENTICATED"""
        if self.state.value.status in (AuthStatus.ERROR, AuthStatus.SUCCESS):
            user = self.current_user
            self.state.set(AuthState.authenticated(user) if user else AuthState.unauthenticated())
