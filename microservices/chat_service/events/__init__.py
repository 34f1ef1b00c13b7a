"""
Chat Service Events Package
"""

from .models import ChatMessageSentEvent
from .publishers import publish_message_sent

__all__ = ["ChatMessageSentEvent", "publish_message_sent"]
