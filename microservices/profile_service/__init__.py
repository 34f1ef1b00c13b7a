"""
Profile Service

Profile store: identity -> profile record, display-name resolution and the
live current-user profile.
"""

from .models import ProfileCreateRequest, ProfileLookup, ProfileUpdateRequest, SkillLevel, UserProfile
from .profile_repository import ProfileRepository
from .profile_service import ProfileService
from .protocols import NotProfileOwnerError, ProfileAlreadyExistsError, ProfileNotFoundError

__all__ = [
    "ProfileService",
    "ProfileRepository",
    "UserProfile",
    "ProfileCreateRequest",
    "ProfileUpdateRequest",
    "ProfileLookup",
    "SkillLevel",
    "ProfileNotFoundError",
    "ProfileAlreadyExistsError",
    "NotProfileOwnerError",
]
