"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - common.py: Base ID generators, timestamps
    - sports_event_fixtures.py: Event requests and documents
    - profile_fixtures.py: Profile and sign-up requests
"""

# Common utilities
from .common import (
    make_user_id,
    make_email,
    make_timestamp,
)

# Sports event fixtures
from .sports_event_fixtures import (
    make_event_id,
    make_event_request,
    make_event_document,
)

# Profile fixtures
from .profile_fixtures import (
    make_profile_create_request,
    make_sign_up_request,
)

__all__ = [
    # Common
    "make_user_id",
    "make_email",
    "make_timestamp",
    # Sports events
    "make_event_id",
    "make_event_request",
    "make_event_document",
    # Profiles
    "make_profile_create_request",
    "make_sign_up_request",
]
