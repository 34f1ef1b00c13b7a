#!/usr/bin/env python3
"""Campus sports domain configuration

Policy values enforced by the services (capacity bounds, sign-up rules,
result display duration, remote call timeout) and backend selection.
"""
import os
from dataclasses import dataclass
from typing import Optional

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class CampusConfig:
    """Campus sports policy and backend settings"""

    # ===========================================
    # Sign-up policy
    # ===========================================
    student_email_suffix: str = "@mavs.uta.edu"
    password_min_length: int = 6

    # ===========================================
    # Event capacity
    # ===========================================
    min_participants: int = 2
    max_participants: int = 20

    # ===========================================
    # Client behaviour
    # ===========================================
    action_result_ttl_seconds: float = 3.0
    operation_timeout_seconds: float = 15.0

    # ===========================================
    # Backends
    # ===========================================
    store_backend: str = "memory"  # memory | postgres
    identity_base_url: str = "https://identitytoolkit.googleapis.com/v1"
    identity_api_key: Optional[str] = None
    event_bus_enabled: bool = False

    @classmethod
    def from_env(cls) -> 'CampusConfig':
        """Load campus config from environment"""
        return cls(
            student_email_suffix=os.getenv("STUDENT_EMAIL_SUFFIX", "@mavs.uta.edu").lower(),
            password_min_length=_int(os.getenv("PASSWORD_MIN_LENGTH", "6"), 6),
            min_participants=_int(os.getenv("EVENT_MIN_PARTICIPANTS", "2"), 2),
            max_participants=_int(os.getenv("EVENT_MAX_PARTICIPANTS", "20"), 20),
            action_result_ttl_seconds=_float(os.getenv("ACTION_RESULT_TTL_SECONDS", "3"), 3.0),
            operation_timeout_seconds=_float(os.getenv("OPERATION_TIMEOUT_SECONDS", "15"), 15.0),
            store_backend=os.getenv("STORE_BACKEND", "memory").lower(),
            identity_base_url=os.getenv("IDENTITY_BASE_URL", "https://identitytoolkit.googleapis.com/v1"),
            identity_api_key=os.getenv("IDENTITY_API_KEY") or os.getenv("FIREBASE_API_KEY"),
            event_bus_enabled=_bool(os.getenv("EVENT_BUS_ENABLED", "false")),
        )
