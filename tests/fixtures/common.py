"""
Common/Shared Fixtures

Base factories and generators used across multiple services.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

STUDENT_EMAIL_SUFFIX = "@mavs.uta.edu"


def make_user_id() -> str:
    """Generate a unique identity"""
    return f"usr_test_{uuid.uuid4().hex[:12]}"


def make_email(prefix: Optional[str] = None, suffix: str = STUDENT_EMAIL_SUFFIX) -> str:
    """Generate a unique student email"""
    prefix = prefix or f"test_{uuid.uuid4().hex[:8]}"
    return f"{prefix}{suffix}"


def make_timestamp() -> datetime:
    """Generate current UTC timestamp"""
    return datetime.now(timezone.utc)
