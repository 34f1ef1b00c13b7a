#!/usr/bin/env python3
"""
Core Module for Campus Sports

Shared infrastructure used by every service package.

COMPONENTS:
    - config/: Environment-driven configuration (infra, campus policy, logging)
    - config_manager.py: Per-service configuration access
    - errors.py: Error taxonomy shared by all services
    - document_store.py: Reactive document store interface and in-memory backend
    - postgres_document_store.py: PostgreSQL (JSONB + LISTEN/NOTIFY) backend
    - observable.py / action_state.py: Live state holders for the presentation layer
    - nats_client.py: NATS event bus for domain events
    - logger.py: Service logger setup

USAGE:
    from core.config_manager import ConfigManager

    config = ConfigManager("sports_event_service")
"""

from .config_manager import ConfigManager
from .errors import CampusSportsError, ErrorKind

__all__ = [
    "ConfigManager",
    "CampusSportsError",
    "ErrorKind",
]

__version__ = "1.0.0"
