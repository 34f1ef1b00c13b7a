"""
Profile Service Models

User profile documents and request models
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class SkillLevel(str, Enum):
    """Self-reported skill level"""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


def _unique(values: List[str]) -> List[str]:
    seen = []
    for v in values:
        v = v.strip()
        if v and v not in seen:
            seen.append(v)
    return seen


class UserProfile(BaseModel):
    """Profile document keyed by identity"""
    id: str = Field(..., description="Identity issued by the identity provider")
    full_name: str = ""
    email: str = ""
    major: str = ""
    year: str = ""
    favorite_sports: List[str] = Field(default_factory=list)
    skill_level: SkillLevel = SkillLevel.BEGINNER
    bio: str = ""
    joined_event_ids: List[str] = Field(default_factory=list)
    created_event_ids: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @field_validator("favorite_sports")
    @classmethod
    def dedupe_sports(cls, v):
        return _unique(v)

    @property
    def display_name(self) -> str:
        return self.full_name.strip() or self.id

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="python", exclude={"id"}) | {"skill_level": self.skill_level.value}

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "UserProfile":
        return cls.model_validate(doc)


class ProfileCreateRequest(BaseModel):
    """Fields captured at sign-up"""
    full_name: str
    email: str
    major: str = ""
    year: str = ""
    favorite_sports: List[str] = Field(default_factory=list)
    skill_level: SkillLevel = SkillLevel.BEGINNER
    bio: str = ""

    @field_validator("full_name", "email", "major", "year", "bio")
    @classmethod
    def strip_text(cls, v):
        return v.strip()

    @field_validator("favorite_sports")
    @classmethod
    def dedupe_sports(cls, v):
        return _unique(v)


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; unset fields are left unchanged"""
    full_name: Optional[str] = None
    major: Optional[str] = None
    year: Optional[str] = None
    favorite_sports: Optional[List[str]] = None
    skill_level: Optional[SkillLevel] = None
    bio: Optional[str] = None

    @field_validator("full_name", "major", "year", "bio")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if v is not None else v

    @field_validator("favorite_sports")
    @classmethod
    def dedupe_sports(cls, v):
        return _unique(v) if v is not None else v

    def changes(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_none=True)
        if "skill_level" in data:
            data["skill_level"] = SkillLevel(data["skill_level"]).value
        return data


class ProfileLookup(BaseModel):
    """Explicit found / not-found result of a profile read"""
    identity: str
    profile: Optional[UserProfile] = None

    @property
    def found(self) -> bool:
        return self.profile is not None

    @classmethod
    def of(cls, identity: str, profile: Optional[UserProfile]) -> "ProfileLookup":
        return cls(identity=identity, profile=profile)
