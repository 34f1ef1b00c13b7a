"""
Profile Service Events Package
"""

from .models import ProfileCreatedEvent, ProfileUpdatedEvent
from .publishers import publish_profile_created, publish_profile_updated

__all__ = [
    "ProfileCreatedEvent",
    "ProfileUpdatedEvent",
    "publish_profile_created",
    "publish_profile_updated",
]
