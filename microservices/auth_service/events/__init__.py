"""
Authentication Service Events Package
"""

from .models import UserAuthEvent
from .publishers import publish_user_auth_event

__all__ = ["UserAuthEvent", "publish_user_auth_event"]
