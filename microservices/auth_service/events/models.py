"""
Authentication Service Event Models
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserAuthEvent(BaseModel):
    """Sign-up, sign-in or sign-out of an identity"""

    user_id: str = Field(..., description="Identity")
    email: Optional[str] = Field(None, description="Student email")
    timestamp: str = Field(..., description="Event timestamp")
