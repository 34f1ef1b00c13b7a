"""
Unit tests for service models
"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from microservices.auth_service.models import AuthState, AuthStatus, AuthUser
from microservices.chat_service.models import ChatMessage, MessageKind
from microservices.profile_service.models import (
    ProfileLookup,
    ProfileUpdateRequest,
    SkillLevel,
    UserProfile,
)
from microservices.sports_event_service.models import Difficulty, EventLookup, SportsEvent
from tests.fixtures import make_event_document, make_event_request, make_user_id

pytestmark = pytest.mark.unit


class TestSportsEvent:

    def test_from_document_with_kick_history(self):
        creator = make_user_id()
        kicked_at = datetime(2024, 3, 1, 18, 0, tzinfo=timezone.utc)
        doc = make_event_document(
            creator,
            kicked=[{"user_id": "u2", "user_name": "Jo", "reason": "Late", "kicked_at": kicked_at.isoformat()}],
        )

        event = SportsEvent.from_document(doc)

        assert event.kicked[0].kicked_at == kicked_at
        assert event.difficulty == Difficulty.BEGINNER

    def test_display_name_falls_back_to_identity(self):
        creator = make_user_id()
        event = SportsEvent.from_document(make_event_document(creator, participant_names={}))

        assert event.display_name_of(creator) == creator

    def test_create_request_strips_text(self):
        request = make_event_request(title="  Night Run  ", location=" Campus Loop Trail ")

        assert request.title == "Night Run"
        assert request.location == "Campus Loop Trail"

    def test_unknown_difficulty_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_event_request(difficulty="Pro")

    def test_lookup(self):
        assert EventLookup(event_id="e1").found is False


class TestUserProfile:

    def test_favorite_sports_deduplicated(self):
        profile = UserProfile(id="u1", favorite_sports=["Tennis", " Tennis", "", "Soccer"])

        assert profile.favorite_sports == ["Tennis", "Soccer"]

    def test_display_name(self):
        assert UserProfile(id="u1", full_name="  ").display_name == "u1"
        assert UserProfile(id="u1", full_name="Sam").display_name == "Sam"

    def test_to_document_excludes_id(self):
        doc = UserProfile(id="u1", full_name="Sam", skill_level=SkillLevel.ADVANCED).to_document()

        assert "id" not in doc
        assert doc["skill_level"] == "Advanced"

    def test_update_changes_only_set_fields(self):
        request = ProfileUpdateRequest(bio=" Keeper ", skill_level=SkillLevel.ADVANCED)

        assert request.changes() == {"bio": "Keeper", "skill_level": "Advanced"}

    def test_lookup_of(self):
        lookup = ProfileLookup.of("u1", None)

        assert lookup.found is False
        assert lookup.identity == "u1"


class TestChatMessage:

    def test_kind_is_tagged(self):
        assert not MessageKind.TEXT.is_system
        assert all(k.is_system for k in (MessageKind.SYSTEM_JOIN, MessageKind.SYSTEM_LEAVE, MessageKind.SYSTEM_KICK))

    def test_from_document(self):
        message = ChatMessage.from_document({
            "id": "m1",
            "event_id": "e1",
            "sender_id": "system",
            "sender_name": "System",
            "body": "Jo joined the event",
            "timestamp": "2024-03-01T18:00:00.000000+00:00",
            "kind": "system_join",
            "subject_id": "u2",
        })

        assert message.is_system
        assert message.timestamp.tzinfo is not None


class TestAuthState:

    def test_branches(self):
        user = AuthUser(uid="u1", email="u1@mavs.uta.edu")

        assert AuthState.loading().status == AuthStatus.LOADING
        assert AuthState.authenticated(user).user == user
        assert AuthState.unauthenticated().user is None
        assert AuthState.error("Nope", code="weak_password").code == "weak_password"
        assert AuthState.success("Sent").message == "Sent"
