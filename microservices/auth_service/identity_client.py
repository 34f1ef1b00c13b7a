"""
Identity Provider Client

HTTP client for the Identity Toolkit REST API (email/password accounts).
Provider error codes are mapped onto the campus error taxonomy.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.errors import (
    AuthorizationError,
    CampusSportsError,
    ConflictError,
    IdentityProviderError,
    ValidationError,
)

from .models import AuthUser

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://identitytoolkit.googleapis.com/v1"


def _map_provider_error(code: str) -> CampusSportsError:
    """Translate an Identity Toolkit error message into a campus error"""
    key = code.split(":")[0].strip()
    if key == "EMAIL_EXISTS":
        return ConflictError("An account already exists for this email", code="email_exists")
    if key in ("EMAIL_NOT_FOUND", "INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS"):
        return AuthorizationError("Invalid email or password", code="invalid_credentials")
    if key == "USER_DISABLED":
        return AuthorizationError("This account has been disabled", code="user_disabled")
    if key == "WEAK_PASSWORD":
        return ValidationError("Password is too weak", code="weak_password", field="password")
    if key in ("INVALID_EMAIL", "MISSING_EMAIL"):
        return ValidationError("Invalid email address", code="invalid_email", field="email")
    if key == "TOO_MANY_ATTEMPTS_TRY_LATER":
        return IdentityProviderError("Too many attempts, try again later", code="too_many_attempts")
    return IdentityProviderError(f"Identity provider error: {code}", code="identity_failure")


class FirebaseIdentityClient:
    """Identity provider over the Identity Toolkit REST API"""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize identity client

        Args:
            api_key: Web API key of the identity project
            base_url: Identity Toolkit base URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._current_user: Optional[AuthUser] = None

    @property
    def current_user(self) -> Optional[AuthUser]:
        return self._current_user

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # =============================================================================
    # Transport
    # =============================================================================

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _send(self, endpoint: str, payload: Dict[str, Any]) -> httpx.Response:
        return await self.client.post(
            f"{self.base_url}/{endpoint}",
            params={"key": self.api_key},
            json=payload,
        )

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self._send(endpoint, payload)
        except httpx.TimeoutException as e:
            logger.error(f"Identity request {endpoint} timed out: {e}")
            raise IdentityProviderError("Identity service timed out", code="timeout")
        except httpx.TransportError as e:
            logger.error(f"Identity request {endpoint} failed: {e}")
            raise IdentityProviderError(f"Identity service unreachable: {e}")

        if response.status_code >= 400:
            try:
                message = response.json().get("error", {}).get("message", "")
            except ValueError:
                message = ""
            logger.warning(f"Identity request {endpoint} rejected: {response.status_code} {message}")
            if response.status_code >= 500 or not message:
                raise IdentityProviderError(
                    f"Identity service error ({response.status_code})", status_code=response.status_code
                )
            raise _map_provider_error(message)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Identity request {endpoint} returned an unreadable body: {e}")
            raise IdentityProviderError("Identity service returned an invalid response", code="invalid_response")

    @staticmethod
    def _to_user(data: Dict[str, Any]) -> AuthUser:
        expires = data.get("expiresIn")
        return AuthUser(
            uid=data["localId"],
            email=data.get("email"),
            id_token=data.get("idToken"),
            refresh_token=data.get("refreshToken"),
            expires_in=int(expires) if expires else None,
        )

    # =============================================================================
    # Accounts
    # =============================================================================

    async def sign_up(self, email: str, password: str) -> AuthUser:
        """Create an email/password account and sign it in"""
        data = await self._post(
            "accounts:signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        self._current_user = self._to_user(data)
        logger.info(f"Identity created for {email}: {self._current_user.uid}")
        return self._current_user

    async def sign_in(self, email: str, password: str) -> AuthUser:
        data = await self._post(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        self._current_user = self._to_user(data)
        logger.info(f"Signed in {email}: {self._current_user.uid}")
        return self._current_user

    async def sign_out(self) -> None:
        """Drop the local session (tokens are not revoked server-side)"""
        self._current_user = None

    async def send_password_reset(self, email: str) -> None:
        await self._post(
            "accounts:sendOobCode",
            {"requestType": "PASSWORD_RESET", "email": email},
        )
        logger.info(f"Password reset email requested for {email}")
