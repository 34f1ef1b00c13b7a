"""
Profile and Auth Fixtures
"""
from typing import Any

from microservices.auth_service.models import SignUpRequest
from microservices.profile_service.models import ProfileCreateRequest, SkillLevel

from .common import make_email


def make_profile_create_request(**overrides: Any) -> ProfileCreateRequest:
    data = {
        "full_name": "Alex Rivera",
        "email": make_email(),
        "major": "Computer Science",
        "year": "Junior",
        "favorite_sports": ["Basketball", "Soccer"],
        "skill_level": SkillLevel.INTERMEDIATE,
        "bio": "Always up for a game",
    }
    data.update(overrides)
    return ProfileCreateRequest(**data)


def make_sign_up_request(**overrides: Any) -> SignUpRequest:
    data = {
        "email": make_email(),
        "password": "secret123",
        "confirm_password": "secret123",
        "full_name": "Alex Rivera",
        "major": "Computer Science",
        "year": "Junior",
        "favorite_sports": ["Basketball"],
        "skill_level": SkillLevel.BEGINNER,
        "bio": "",
    }
    data.update(overrides)
    return SignUpRequest(**data)
