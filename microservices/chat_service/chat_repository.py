"""
Chat Service Data Repository

Data access layer over the reactive document store (``messages`` collection)
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from core.document_store import (
    Direction,
    DocumentQuery,
    DocumentStore,
    FilterOp,
    Subscription,
    store_call,
)

from .models import ChatMessage

logger = logging.getLogger(__name__)


def _parse(docs: List[Dict[str, Any]]) -> List[ChatMessage]:
    messages = []
    for doc in docs:
        try:
            messages.append(ChatMessage.from_document(doc))
        except ValueError as e:
            logger.error(f"Skipping malformed message {doc.get('id')}: {e}")
    return messages


class ChatRepository:
    """Chat repository - document store"""

    collection = "messages"

    def __init__(self, store: DocumentStore, operation_timeout: Optional[float] = 15.0):
        self.store = store
        self.operation_timeout = operation_timeout

    @staticmethod
    def _event_query(event_id: str) -> DocumentQuery:
        return (
            DocumentQuery()
            .where("event_id", FilterOp.EQ, event_id)
            .ordered("timestamp", Direction.ASCENDING)
        )

    async def append_message(self, data: Dict[str, Any]) -> str:
        return await store_call(
            self.store.create(self.collection, data),
            self.operation_timeout,
            "append_message",
        )

    async def list_messages(self, event_id: str) -> List[ChatMessage]:
        docs = await store_call(
            self.store.query(self.collection, self._event_query(event_id)),
            self.operation_timeout,
            "list_messages",
        )
        return _parse(docs)

    async def watch_messages(
        self, event_id: str, callback: Callable[[List[ChatMessage]], Any]
    ) -> Subscription:
        return await store_call(
            self.store.subscribe(self.collection, self._event_query(event_id), lambda docs: callback(_parse(docs))),
            self.operation_timeout,
            "watch_messages",
        )
