"""
Authentication Service Factory

Factory for creating AuthService with real dependencies.
This is the ONLY module that imports concrete implementations.
"""

import logging
from typing import Optional

from core.config_manager import ConfigManager
from core.errors import IdentityProviderError

from .auth_service import AuthService
from .identity_client import FirebaseIdentityClient
from .protocols import IdentityProviderProtocol, ProfileServiceProtocol

logger = logging.getLogger(__name__)


def create_identity_client(config: Optional[ConfigManager] = None) -> FirebaseIdentityClient:
    if config is None:
        config = ConfigManager("auth_service")
    campus = config.campus
    if not campus.identity_api_key:
        raise IdentityProviderError("IDENTITY_API_KEY is not configured", code="identity_not_configured")
    return FirebaseIdentityClient(
        api_key=campus.identity_api_key,
        base_url=campus.identity_base_url,
        timeout=campus.operation_timeout_seconds,
    )


def create_auth_service(
    profiles: ProfileServiceProtocol,
    config: Optional[ConfigManager] = None,
    event_bus=None,
    identity: Optional[IdentityProviderProtocol] = None,
) -> AuthService:
    """
    Create AuthService with all real dependencies

    Args:
        profiles: Profile service (sign-up creates the profile)
        config: Optional config manager (creates default if not provided)
        event_bus: Optional event bus for event publishing
        identity: Identity provider (defaults to the REST client)

    Returns:
        AuthService instance
    """
    if config is None:
        config = ConfigManager("auth_service")

    if identity is None:
        identity = create_identity_client(config)

    logger.info("AuthService created with real dependencies")

    return AuthService(
        identity=identity,
        profiles=profiles,
        event_bus=event_bus,
        policy=config.campus,
    )


__all__ = ["create_identity_client", "create_auth_service"]
