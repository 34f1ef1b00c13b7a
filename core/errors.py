"""
Campus Sports Error Taxonomy

Every failure surfaced to callers is a CampusSportsError carrying a stable
``kind`` (so the UI can react per category) and a stable ``code`` (so the UI
can show a specific message per failure, e.g. event full vs. already joined).

Service-specific subclasses live in each service's protocols module.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Stable error categories"""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    STORE = "store"
    TRANSIENT_LOAD = "transient_load"
    TIMEOUT = "timeout"
    IDENTITY = "identity"


class CampusSportsError(Exception):
    """Base exception for all campus sports failures"""

    kind: ErrorKind = ErrorKind.STORE
    default_code: str = "error"

    def __init__(self, message: str, code: Optional[str] = None, **details: Any):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details: Dict[str, Any] = details

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value!r}, code={self.code!r}, message={self.message!r})"


class ValidationError(CampusSportsError):
    """Bad input, rejected before any remote call"""
    kind = ErrorKind.VALIDATION
    default_code = "invalid_field"

    def __init__(self, message: str, code: Optional[str] = None, field: Optional[str] = None, **details: Any):
        super().__init__(message, code, **details)
        self.field = field


class AuthorizationError(CampusSportsError):
    """Actor lacks permission for the operation"""
    kind = ErrorKind.AUTHORIZATION
    default_code = "not_authorized"


class ConflictError(CampusSportsError):
    """Operation conflicts with the current state of the record"""
    kind = ErrorKind.CONFLICT
    default_code = "conflict"


class NotFoundError(CampusSportsError):
    """Target document does not exist"""
    kind = ErrorKind.NOT_FOUND
    default_code = "not_found"


class StoreError(CampusSportsError):
    """Backend failure; the backend's message is passed through"""
    kind = ErrorKind.STORE
    default_code = "store_failure"


class TransientLoadError(CampusSportsError):
    """Non-critical lookup failed; callers degrade instead of aborting"""
    kind = ErrorKind.TRANSIENT_LOAD
    default_code = "transient_load"


class OperationTimeoutError(CampusSportsError):
    """Remote call never resolved within the configured timeout"""
    kind = ErrorKind.TIMEOUT
    default_code = "timeout"


class IdentityProviderError(CampusSportsError):
    """Identity service unreachable or returned an unexpected response"""
    kind = ErrorKind.IDENTITY
    default_code = "identity_failure"


__all__ = [
    "ErrorKind",
    "CampusSportsError",
    "ValidationError",
    "AuthorizationError",
    "ConflictError",
    "NotFoundError",
    "StoreError",
    "TransientLoadError",
    "OperationTimeoutError",
    "IdentityProviderError",
]
