"""
Sports Event Service Events Package
"""

from .models import SportsEventCreatedEvent, SportsEventLifecycleEvent, SportsEventMembershipEvent
from .publishers import publish_event_created, publish_lifecycle_changed, publish_membership_changed

__all__ = [
    "SportsEventCreatedEvent",
    "SportsEventMembershipEvent",
    "SportsEventLifecycleEvent",
    "publish_event_created",
    "publish_membership_changed",
    "publish_lifecycle_changed",
]
