"""
Profile Service Event Models
"""

from typing import List

from pydantic import BaseModel, Field


class ProfileCreatedEvent(BaseModel):
    """Profile created at sign-up"""

    user_id: str = Field(..., description="Profile owner")
    full_name: str = Field(..., description="Display name")
    email: str = Field(..., description="Student email")
    timestamp: str = Field(..., description="Event timestamp")


class ProfileUpdatedEvent(BaseModel):
    """Profile fields changed by the owner"""

    user_id: str = Field(..., description="Profile owner")
    updated_fields: List[str] = Field(default_factory=list, description="Changed field names")
    timestamp: str = Field(..., description="Event timestamp")
