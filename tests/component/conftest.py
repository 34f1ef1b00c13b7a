"""
Component Test Layer Configuration

Services are wired through their factories to the in-memory document store,
with the event bus and identity provider replaced by mocks.

Usage:
    pytest tests/component -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"
os.environ["EVENT_BUS_ENABLED"] = "false"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.config import AppConfig, CampusConfig
from core.config_manager import ConfigManager
from core.document_store import InMemoryDocumentStore
from microservices.auth_service.factory import create_auth_service
from microservices.chat_service.factory import create_chat_service
from microservices.profile_service.factory import create_profile_service
from microservices.sports_event_service.factory import (
    create_sports_event_repository,
    create_sports_event_service,
)
from tests.component.mocks import MockEventBus, MockIdentityProvider
from tests.fixtures import make_event_request, make_profile_create_request, make_user_id


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Config
# =============================================================================

@pytest.fixture
def campus_policy() -> CampusConfig:
    """Default policy with short timeouts for tests"""
    return CampusConfig(operation_timeout_seconds=2.0, action_result_ttl_seconds=0.05)


@pytest.fixture
def config(campus_policy: CampusConfig) -> ConfigManager:
    return ConfigManager("campus_test", settings=AppConfig(environment="testing", campus=campus_policy))


# =============================================================================
# Backends
# =============================================================================

@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Fresh in-memory document store"""
    return InMemoryDocumentStore()


@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Mock NATS event bus"""
    return MockEventBus()


@pytest.fixture
def mock_identity() -> MockIdentityProvider:
    """Mock identity provider"""
    return MockIdentityProvider()


# =============================================================================
# Services
# =============================================================================

@pytest.fixture
def profile_service(store, config, mock_event_bus):
    return create_profile_service(store, config=config, event_bus=mock_event_bus)


@pytest.fixture
def event_repository(store, config):
    return create_sports_event_repository(store, config=config)


@pytest.fixture
def chat_service(store, config, mock_event_bus, event_repository, profile_service):
    return create_chat_service(
        store,
        event_reader=event_repository,
        name_resolver=profile_service,
        config=config,
        event_bus=mock_event_bus,
    )


@pytest.fixture
def sports_event_service(store, config, mock_event_bus, event_repository, profile_service, chat_service):
    service = create_sports_event_service(
        store,
        name_resolver=profile_service,
        chat=chat_service,
        config=config,
        event_bus=mock_event_bus,
        repository=event_repository,
    )
    yield service
    service.stop()


@pytest.fixture
def auth_service(profile_service, config, mock_event_bus, mock_identity):
    return create_auth_service(
        profile_service,
        config=config,
        event_bus=mock_event_bus,
        identity=mock_identity,
    )


# =============================================================================
# Helpers
# =============================================================================

@pytest.fixture
def register_player(profile_service):
    """Create a profile and return its identity"""

    async def _register(full_name: str = "Jordan Lee") -> str:
        identity = make_user_id()
        await profile_service.create_profile(identity, make_profile_create_request(full_name=full_name))
        return identity

    return _register


@pytest.fixture
def create_event(sports_event_service, register_player):
    """Create an event owned by a freshly registered creator; returns (event_id, creator_id)"""

    async def _create(creator_id: str = None, **overrides):
        if creator_id is None:
            creator_id = await register_player("Casey Organizer")
        event_id = await sports_event_service.create_event(make_event_request(**overrides), creator_id)
        return event_id, creator_id

    return _create
