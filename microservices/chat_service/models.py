"""
Chat Service Models

Append-only per-event chat messages
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


# Sender of join/leave/kick/close notices
SYSTEM_SENDER_ID = "system"
SYSTEM_SENDER_NAME = "System"


class MessageKind(str, Enum):
    """User-authored text or a system notice"""
    TEXT = "text"
    SYSTEM_JOIN = "system_join"
    SYSTEM_LEAVE = "system_leave"
    SYSTEM_KICK = "system_kick"

    @property
    def is_system(self) -> bool:
        return self is not MessageKind.TEXT


class ChatMessage(BaseModel):
    """Message document; never mutated after creation"""
    id: str
    event_id: str
    sender_id: str
    sender_name: str
    body: str
    timestamp: Optional[datetime] = None
    kind: MessageKind = MessageKind.TEXT
    subject_id: Optional[str] = None

    @property
    def is_system(self) -> bool:
        return self.kind.is_system

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "ChatMessage":
        return cls.model_validate(doc)
