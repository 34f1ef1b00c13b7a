"""
Component tests for backend failures and timeouts

Store errors surface as StoreError, calls that never resolve surface as
OperationTimeoutError, and non-critical lookups degrade instead of failing.
"""
import pytest

from core.config import AppConfig, CampusConfig
from core.config_manager import ConfigManager
from core.errors import ErrorKind, OperationTimeoutError, StoreError
from microservices.sports_event_service.protocols import EventFullError
from tests.component.mocks import FlakyDocumentStore
from tests.fixtures import make_event_request, make_user_id

pytestmark = [pytest.mark.component, pytest.mark.asyncio]


@pytest.fixture
def store() -> FlakyDocumentStore:
    return FlakyDocumentStore()


@pytest.fixture
def config() -> ConfigManager:
    policy = CampusConfig(operation_timeout_seconds=0.05, action_result_ttl_seconds=0.05)
    return ConfigManager("campus_test", settings=AppConfig(environment="testing", campus=policy))


class TestStoreErrors:
    """Backend exceptions"""

    async def test_backend_error_becomes_store_error(self, sports_event_service, store):
        store.fail("create", "events", RuntimeError("disk full"))

        with pytest.raises(StoreError) as exc_info:
            await sports_event_service.create_event(make_event_request(), make_user_id())

        assert exc_info.value.kind == ErrorKind.STORE
        assert "disk full" in exc_info.value.message
        assert exc_info.value.details["operation"] == "create_event"

    async def test_domain_errors_pass_through(self, sports_event_service, create_event):
        event_id, _ = await create_event(max_participants=2)
        await sports_event_service.join_event(event_id, make_user_id())

        with pytest.raises(EventFullError):
            await sports_event_service.join_event(event_id, make_user_id())

    async def test_failed_notice_keeps_committed_join(self, sports_event_service, create_event, store):
        event_id, _ = await create_event()
        store.fail("create", "messages", RuntimeError("messages unavailable"))
        member = make_user_id()

        event = await sports_event_service.join_event(event_id, member)

        assert member in event.participant_ids
        store.heal()
        assert (await sports_event_service.get_event(event_id)).event.participant_ids[-1] == member


class TestTimeouts:
    """Calls that never resolve"""

    async def test_stalled_transaction_times_out(self, sports_event_service, create_event, store):
        event_id, _ = await create_event()
        store.stall("transaction", "events", 1.0)

        with pytest.raises(OperationTimeoutError) as exc_info:
            await sports_event_service.join_event(event_id, make_user_id())

        assert exc_info.value.kind == ErrorKind.TIMEOUT

    async def test_stalled_profile_read_degrades_display_name(self, profile_service, store):
        """Name resolution never fails the caller"""
        identity = make_user_id()
        store.stall("get", "users", 1.0)

        assert await profile_service.resolve_display_name(identity) == identity

    async def test_unavailable_profiles_do_not_block_join(self, sports_event_service, create_event, store):
        event_id, _ = await create_event()
        store.fail("get", "users", RuntimeError("users unavailable"))
        member = make_user_id()

        event = await sports_event_service.join_event(event_id, member)

        assert event.participant_names[member] == member

    async def test_malformed_profile_does_not_block_join(self, sports_event_service, create_event, store):
        event_id, _ = await create_event()
        await store.create("users", {"full_name": "Bad", "skill_level": "Expert"}, doc_id="u-bad")

        event = await sports_event_service.join_event(event_id, "u-bad")

        assert "u-bad" in event.participant_ids
        assert event.participant_names["u-bad"] == "u-bad"
