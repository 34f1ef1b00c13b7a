"""
Profile Service Business Logic

Maps identities to profile records and resolves display names for the
event catalog and chat.
"""

import logging
from typing import Optional

from core.document_store import Subscription
from core.errors import CampusSportsError, TransientLoadError, ValidationError
from core.observable import Observable

from .events.publishers import publish_profile_created, publish_profile_updated
from .models import ProfileCreateRequest, ProfileLookup, ProfileUpdateRequest, UserProfile
from .protocols import (
    EventBusProtocol,
    NotProfileOwnerError,
    ProfileNotFoundError,
    ProfileRepositoryProtocol,
)

logger = logging.getLogger(__name__)


class ProfileService:
    """Profile store and display-name resolution"""

    def __init__(
        self,
        repository: ProfileRepositoryProtocol,
        event_bus: Optional[EventBusProtocol] = None,
    ):
        """
        Initialize profile service with injected dependencies

        Args:
            repository: Repository for profile documents
            event_bus: Optional event bus for publishing events
        """
        self.repository = repository
        self.event_bus = event_bus
        self.current_profile: Observable[Optional[UserProfile]] = Observable(None, name="current_profile")
        self._watch: Optional[Subscription] = None
        self._watched_identity: Optional[str] = None

        logger.info("ProfileService initialized with dependency injection")

    # ====================
    # Reads
    # ====================

    async def get_profile(self, identity: str) -> ProfileLookup:
        """Read a profile as an explicit found/not-found result"""
        profile = await self.repository.get_profile(identity)
        return ProfileLookup.of(identity, profile)

    async def resolve_display_name(self, identity: str) -> str:
        """
        Display name for an identity.

        Falls back to the raw identity when the profile is missing, has a
        blank name, or cannot be read. Never raises.
        """
        try:
            profile = await self.repository.get_profile(identity)
        except CampusSportsError as e:
            degraded = TransientLoadError(f"Could not load profile for {identity}: {e.message}", identity=identity)
            logger.warning(f"{degraded.message}; using identity as display name")
            return identity
        if profile is None:
            return identity
        return profile.display_name

    # ====================
    # Writes
    # ====================

    async def create_profile(self, identity: str, request: ProfileCreateRequest) -> UserProfile:
        """Create the profile for a newly signed-up identity (once)"""
        if not request.full_name:
            raise ValidationError("Please enter your full name", code="invalid_field", field="full_name")

        profile = UserProfile(
            id=identity,
            full_name=request.full_name,
            email=request.email.lower(),
            major=request.major,
            year=request.year,
            favorite_sports=request.favorite_sports,
            skill_level=request.skill_level,
            bio=request.bio,
        )
        created = await self.repository.create_profile(profile)
        logger.info(f"Profile created for {identity}")

        await publish_profile_created(self.event_bus, identity, created.full_name, created.email)
        return created

    async def update_profile(
        self, actor_identity: str, identity: str, request: ProfileUpdateRequest
    ) -> UserProfile:
        """Apply a partial update; only the owner may edit"""
        if actor_identity != identity:
            logger.warning(f"{actor_identity} attempted to edit profile {identity}")
            raise NotProfileOwnerError("You can only edit your own profile")

        changes = request.changes()
        if "full_name" in changes and not changes["full_name"]:
            raise ValidationError("Full name cannot be blank", code="invalid_field", field="full_name")
        if not changes:
            lookup = await self.get_profile(identity)
            if lookup.profile is None:
                raise ProfileNotFoundError(f"Profile not found for {identity}")
            return lookup.profile

        updated = await self.repository.update_profile(identity, changes)
        logger.info(f"Profile updated for {identity}: {sorted(changes)}")

        await publish_profile_updated(self.event_bus, identity, sorted(changes))
        return updated

    # ====================
    # Live current-user profile
    # ====================

    async def watch_profile(self, identity: str) -> Observable[Optional[UserProfile]]:
        """Mirror one identity's profile into ``current_profile``"""
        if self._watch is not None and self._watched_identity == identity:
            return self.current_profile
        self.stop_watching()

        self._watched_identity = identity
        self._watch = await self.repository.watch_profile(identity, self.current_profile.set)
        logger.info(f"Watching profile {identity}")
        return self.current_profile

    def stop_watching(self) -> None:
        """Release the profile watch; safe when not watching"""
        if self._watch is not None:
            self._watch.unsubscribe()
            logger.info(f"Stopped watching profile {self._watched_identity}")
        self._watch = None
        self._watched_identity = None
        self.current_profile.set(None)
