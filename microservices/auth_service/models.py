"""
Authentication Service Models

Identity handles, sign-up/sign-in requests and the observable auth state
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from microservices.profile_service.models import SkillLevel


class AuthStatus(str, Enum):
    """Auth state branches"""
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"
    ERROR = "error"
    SUCCESS = "success"


class AuthUser(BaseModel):
    """
    Authenticated identity issued by the identity provider.

    ``uid`` is the opaque identity used everywhere else in the system.
    """
    uid: str
    email: Optional[str] = None
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


class AuthState(BaseModel):
    """Tagged auth state; ``message`` set for ERROR and SUCCESS"""
    status: AuthStatus = AuthStatus.LOADING
    user: Optional[AuthUser] = None
    message: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def loading(cls) -> "AuthState":
        return cls(status=AuthStatus.LOADING)

    @classmethod
    def authenticated(cls, user: AuthUser) -> "AuthState":
        return cls(status=AuthStatus.AUTHENTICATED, user=user)

    @classmethod
    def unauthenticated(cls) -> "AuthState":
        return cls(status=AuthStatus.UNAUTHENTICATED)

    @classmethod
    def error(cls, message: str, code: Optional[str] = None) -> "AuthState":
        return cls(status=AuthStatus.ERROR, message=message, code=code)

    @classmethod
    def success(cls, message: str) -> "AuthState":
        return cls(status=AuthStatus.SUCCESS, message=message)


class SignUpRequest(BaseModel):
    """Sign-up form: credentials plus the initial profile"""
    email: str
    password: str
    confirm_password: str
    full_name: str
    major: str = ""
    year: str = ""
    favorite_sports: List[str] = Field(default_factory=list)
    skill_level: SkillLevel = SkillLevel.BEGINNER
    bio: str = ""


class SignInRequest(BaseModel):
    email: str
    password: str
