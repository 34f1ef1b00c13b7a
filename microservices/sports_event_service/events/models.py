"""
Sports Event Service Event Models
"""

from typing import Optional

from pydantic import BaseModel, Field


class SportsEventCreatedEvent(BaseModel):
    """New event posted to the catalog"""

    event_id: str = Field(..., description="Event ID")
    title: str = Field(..., description="Event title")
    sport: str = Field(..., description="Sport")
    created_by: str = Field(..., description="Creator identity")
    max_participants: int = Field(..., description="Capacity")
    timestamp: str = Field(..., description="Event timestamp")


class SportsEventMembershipEvent(BaseModel):
    """Roster change: join, leave or kick"""

    event_id: str = Field(..., description="Event ID")
    user_id: str = Field(..., description="Identity whose membership changed")
    user_name: str = Field(..., description="Display name")
    participant_count: int = Field(..., description="Roster size after the change")
    actor_id: Optional[str] = Field(None, description="Creator performing a kick")
    reason: Optional[str] = Field(None, description="Kick reason")
    timestamp: str = Field(..., description="Event timestamp")


class SportsEventLifecycleEvent(BaseModel):
    """Close, cancel or capacity change by the creator"""

    event_id: str = Field(..., description="Event ID")
    actor_id: str = Field(..., description="Creator identity")
    reason: Optional[str] = Field(None, description="Close reason")
    max_participants: Optional[int] = Field(None, description="New capacity")
    timestamp: str = Field(..., description="Event timestamp")
