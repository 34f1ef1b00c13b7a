"""
Chat Service

Per-event chat membership and messaging
"""

from .chat_repository import ChatRepository
from .chat_service import ChatService
from .models import SYSTEM_SENDER_ID, SYSTEM_SENDER_NAME, ChatMessage, MessageKind
from .protocols import ChatNotAuthorizedError

__all__ = [
    "ChatService",
    "ChatRepository",
    "ChatMessage",
    "MessageKind",
    "SYSTEM_SENDER_ID",
    "SYSTEM_SENDER_NAME",
    "ChatNotAuthorizedError",
]
