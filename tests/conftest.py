"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - unit/       : Pure functions, models, config and state holders (no I/O)
    - component/  : Services wired to the in-memory store with mocked event bus / identity
    - integration/: PostgreSQL document store (real DB)
"""
import os
import sys
from typing import Any, Dict

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

# Set testing environment BEFORE any core imports
os.environ.setdefault("ENV", "testing")

# Import shared fixtures from tests/fixtures
from tests.fixtures import (
    # Common
    make_user_id,
    make_email,
    make_timestamp,
    # Sports events
    make_event_request,
    make_event_document,
    # Profiles / auth
    make_profile_create_request,
    make_sign_up_request,
)


# =============================================================================
# Test Configuration
# =============================================================================

class TestConfig:
    """Centralized test configuration"""

    __test__ = False

    # Infrastructure
    POSTGRES_DSN = os.getenv("CAMPUS_TEST_POSTGRES_DSN")
    NATS_URL = os.getenv("NATS_URL", "nats://localhost:4222")

    # Policy
    STUDENT_EMAIL_SUFFIX = "@mavs.uta.edu"

    # Timeouts
    STORE_TIMEOUT = 5
    EVENT_WAIT_TIMEOUT = 2


@pytest.fixture(scope="session")
def test_config() -> TestConfig:
    """Provide test configuration"""
    return TestConfig()


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def creator_id() -> str:
    return make_user_id()


@pytest.fixture
def sample_event_request():
    """A valid event creation request"""
    return make_event_request()


@pytest.fixture
def sample_event_document(creator_id: str) -> Dict[str, Any]:
    """An open event document with only the creator on the roster"""
    return make_event_document(created_by=creator_id)
