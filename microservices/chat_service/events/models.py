"""
Chat Service Event Models
"""

from pydantic import BaseModel, Field


class ChatMessageSentEvent(BaseModel):
    """Message appended to an event chat"""

    event_id: str = Field(..., description="Event ID")
    message_id: str = Field(..., description="Message ID")
    sender_id: str = Field(..., description="Sender identity or 'system'")
    kind: str = Field(..., description="Message kind")
    timestamp: str = Field(..., description="Event timestamp")
