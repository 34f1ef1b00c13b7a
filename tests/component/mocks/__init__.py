"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (event bus, identity provider)
and inject failures into the in-memory store.
"""

from .identity_mock import MockIdentityProvider
from .nats_mock import MockEventBus
from .store_mock import FlakyDocumentStore

__all__ = [
    "MockEventBus",
    "MockIdentityProvider",
    "FlakyDocumentStore",
]
