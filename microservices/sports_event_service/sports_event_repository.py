"""
Sports Event Service Data Repository

Data access layer over the reactive document store (``events`` collection)
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.document_store import (
    Direction,
    DocumentQuery,
    DocumentStore,
    Subscription,
    store_call,
)

from .models import SportsEvent
from .protocols import EventDecision

logger = logging.getLogger(__name__)


def _parse(docs: List[Dict[str, Any]]) -> List[SportsEvent]:
    events = []
    for doc in docs:
        try:
            events.append(SportsEvent.from_document(doc))
        except ValueError as e:
            logger.error(f"Skipping malformed event {doc.get('id')}: {e}")
    return events


class SportsEventRepository:
    """Sports event repository - document store"""

    collection = "events"
    newest_first = DocumentQuery().ordered("created_at", Direction.DESCENDING)

    def __init__(self, store: DocumentStore, operation_timeout: Optional[float] = 15.0):
        self.store = store
        self.operation_timeout = operation_timeout

    async def create_event(self, data: Dict[str, Any]) -> str:
        return await store_call(
            self.store.create(self.collection, data),
            self.operation_timeout,
            "create_event",
        )

    async def get_event(self, event_id: str) -> Optional[SportsEvent]:
        doc = await store_call(
            self.store.get(self.collection, event_id),
            self.operation_timeout,
            "get_event",
        )
        return SportsEvent.from_document(doc) if doc else None

    async def mutate_event(
        self, event_id: str, decide: EventDecision
    ) -> Tuple[Optional[SportsEvent], Optional[SportsEvent]]:
        """Run ``decide`` against the committed event inside one store transaction"""

        def fn(doc):
            return decide(SportsEvent.from_document(doc) if doc else None)

        outcome = await store_call(
            self.store.transaction(self.collection, event_id, fn),
            self.operation_timeout,
            "mutate_event",
        )
        before = SportsEvent.from_document(outcome.before) if outcome.before else None
        after = SportsEvent.from_document(outcome.after) if outcome.after else None
        return before, after

    async def list_events(self) -> List[SportsEvent]:
        docs = await store_call(
            self.store.query(self.collection, self.newest_first),
            self.operation_timeout,
            "list_events",
        )
        return _parse(docs)

    async def watch_events(self, callback: Callable[[List[SportsEvent]], Any]) -> Subscription:
        return await store_call(
            self.store.subscribe(self.collection, self.newest_first, lambda docs: callback(_parse(docs))),
            self.operation_timeout,
            "watch_events",
        )
