"""
Sports Event Service Models

Event documents, roster history and request models
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class Difficulty(str, Enum):
    """Expected skill level for an event"""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class EventState(str, Enum):
    """Lifecycle state derived from an event snapshot"""
    OPEN = "open"
    FULL = "full"
    CLOSED = "closed"
    DELETED = "deleted"


class KickRecord(BaseModel):
    """Append-only record of a participant removed by the creator"""
    user_id: str
    user_name: str
    reason: str
    kicked_at: datetime


class SportsEvent(BaseModel):
    """Event document; participant_ids keeps join order"""
    id: str
    title: str
    sport: str
    location: str
    date: str
    time: str
    max_participants: int
    participant_ids: List[str] = Field(default_factory=list)
    participant_names: Dict[str, str] = Field(default_factory=dict)
    created_by: str
    created_by_name: str = ""
    created_at: Optional[datetime] = None
    description: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    is_active: bool = True
    closed_reason: Optional[str] = None
    closed_at: Optional[datetime] = None
    kicked: List[KickRecord] = Field(default_factory=list)

    def display_name_of(self, identity: str) -> str:
        return self.participant_names.get(identity) or identity

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "SportsEvent":
        return cls.model_validate(doc)


class EventCreateRequest(BaseModel):
    """Fields supplied by the creator"""
    title: str
    sport: str
    location: str
    date: str
    time: str
    max_participants: int
    description: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER

    @field_validator("title", "sport", "location", "date", "time", "description")
    @classmethod
    def strip_text(cls, v):
        return v.strip()


class EventLookup(BaseModel):
    """Explicit found / not-found result of an event read"""
    event_id: str
    event: Optional[SportsEvent] = None

    @property
    def found(self) -> bool:
        return self.event is not None
