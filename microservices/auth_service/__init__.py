"""
Authentication Service

Student sign-up / sign-in policy and auth state over an external identity provider
"""

from .auth_service import AuthService
from .identity_client import FirebaseIdentityClient
from .models import AuthState, AuthStatus, AuthUser, SignInRequest, SignUpRequest

__all__ = [
    "AuthService",
    "FirebaseIdentityClient",
    "AuthState",
    "AuthStatus",
    "AuthUser",
    "SignInRequest",
    "SignUpRequest",
]
