"""
Component tests for the profile store
"""
import pytest

from core.errors import ErrorKind, StoreError, ValidationError
from microservices.profile_service.models import ProfileUpdateRequest, SkillLevel
from microservices.profile_service.protocols import (
    NotProfileOwnerError,
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
)
from tests.fixtures import make_profile_create_request, make_user_id

pytestmark = [pytest.mark.component, pytest.mark.asyncio]


class TestCreateProfile:
    """Profile creation at sign-up"""

    async def test_create_and_read_back(self, profile_service, mock_event_bus):
        identity = make_user_id()
        request = make_profile_create_request(full_name="Sam Park", email="Sam.Park@MAVS.uta.edu")

        created = await profile_service.create_profile(identity, request)

        assert created.id == identity
        assert created.email == "sam.park@mavs.uta.edu"
        assert created.created_at is not None
        lookup = await profile_service.get_profile(identity)
        assert lookup.found
        assert lookup.profile.full_name == "Sam Park"
        assert lookup.profile.skill_level == SkillLevel.INTERMEDIATE
        mock_event_bus.assert_event_published("profile.created", {"user_id": identity})

    async def test_second_create_rejected(self, profile_service):
        identity = make_user_id()
        await profile_service.create_profile(identity, make_profile_create_request())

        with pytest.raises(ProfileAlreadyExistsError) as exc_info:
            await profile_service.create_profile(identity, make_profile_create_request(full_name="Other"))

        assert exc_info.value.kind == ErrorKind.CONFLICT
        assert (await profile_service.get_profile(identity)).profile.full_name == "Alex Rivera"

    async def test_blank_name_rejected(self, profile_service):
        with pytest.raises(ValidationError):
            await profile_service.create_profile(make_user_id(), make_profile_create_request(full_name="  "))

    async def test_missing_profile_is_explicit_not_found(self, profile_service):
        identity = make_user_id()

        lookup = await profile_service.get_profile(identity)

        assert lookup.found is False
        assert lookup.identity == identity


class TestDisplayNames:
    """Display-name resolution"""

    async def test_profile_name(self, profile_service, register_player):
        identity = await register_player("Riley Chen")

        assert await profile_service.resolve_display_name(identity) == "Riley Chen"

    async def test_missing_profile_falls_back_to_identity(self, profile_service):
        identity = make_user_id()

        assert await profile_service.resolve_display_name(identity) == identity

    async def test_malformed_profile_falls_back_to_identity(self, profile_service, store):
        await store.create("users", {"full_name": "Bad", "skill_level": "Expert"}, doc_id="u-bad")

        assert await profile_service.resolve_display_name("u-bad") == "u-bad"

    async def test_malformed_profile_read_is_store_error(self, profile_service, store):
        await store.create("users", {"full_name": "Bad", "skill_level": "Expert"}, doc_id="u-bad")

        with pytest.raises(StoreError) as exc_info:
            await profile_service.get_profile("u-bad")

        assert exc_info.value.code == "malformed_document"


class TestUpdateProfile:
    """Owner-only partial updates"""

    async def test_owner_updates_fields(self, profile_service, register_player, mock_event_bus):
        identity = await register_player("Riley Chen")

        updated = await profile_service.update_profile(
            identity,
            identity,
            ProfileUpdateRequest(bio="Point guard", favorite_sports=["Tennis", "Tennis", "Soccer"]),
        )

        assert updated.bio == "Point guard"
        assert updated.favorite_sports == ["Tennis", "Soccer"]
        assert updated.full_name == "Riley Chen"
        mock_event_bus.assert_event_published("profile.updated", {"user_id": identity})

    async def test_non_owner_rejected(self, profile_service, register_player):
        identity = await register_player()

        with pytest.raises(NotProfileOwnerError) as exc_info:
            await profile_service.update_profile(make_user_id(), identity, ProfileUpdateRequest(bio="hacked"))

        assert exc_info.value.kind == ErrorKind.AUTHORIZATION
        assert (await profile_service.get_profile(identity)).profile.bio != "hacked"

    async def test_update_missing_profile(self, profile_service):
        identity = make_user_id()

        with pytest.raises(ProfileNotFoundError):
            await profile_service.update_profile(identity, identity, ProfileUpdateRequest(bio="hi"))

    async def test_blank_name_update_rejected(self, profile_service, register_player):
        identity = await register_player()

        with pytest.raises(ValidationError):
            await profile_service.update_profile(identity, identity, ProfileUpdateRequest(full_name=" "))

    async def test_empty_update_returns_current(self, profile_service, register_player, mock_event_bus):
        identity = await register_player("Riley Chen")
        mock_event_bus.clear()

        profile = await profile_service.update_profile(identity, identity, ProfileUpdateRequest())

        assert profile.full_name == "Riley Chen"
        mock_event_bus.assert_no_events_published("profile.updated")


class TestWatchProfile:
    """Live current-user profile"""

    async def test_watch_mirrors_updates(self, profile_service, register_player, store):
        identity = await register_player("Riley Chen")

        current = await profile_service.watch_profile(identity)
        assert current.value.full_name == "Riley Chen"

        await profile_service.update_profile(identity, identity, ProfileUpdateRequest(full_name="Riley C."))
        assert current.value.full_name == "Riley C."

    async def test_watch_missing_profile_yields_none(self, profile_service):
        current = await profile_service.watch_profile(make_user_id())

        assert current.value is None

    async def test_watch_same_identity_is_idempotent(self, profile_service, register_player, store):
        identity = await register_player()

        await profile_service.watch_profile(identity)
        await profile_service.watch_profile(identity)

        assert store.subscription_count == 1

    async def test_switching_identity_replaces_watch(self, profile_service, register_player, store):
        first = await register_player("First")
        second = await register_player("Second")

        await profile_service.watch_profile(first)
        current = await profile_service.watch_profile(second)

        assert store.subscription_count == 1
        assert current.value.full_name == "Second"

    async def test_stop_watching_clears_profile(self, profile_service, register_player, store):
        identity = await register_player()
        await profile_service.watch_profile(identity)

        profile_service.stop_watching()

        assert profile_service.current_profile.value is None
        assert store.subscription_count == 0
