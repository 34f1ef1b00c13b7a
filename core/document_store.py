"""
Reactive Document Store

Named collections of JSON-like documents with point reads, create, field
updates, delete, an atomic read-modify-write primitive and live queries
that push the full current result set on every change.

Two backends implement DocumentStore:
- InMemoryDocumentStore (this module): per-process, used by tests and local runs
- PostgresDocumentStore (core.postgres_document_store): JSONB + LISTEN/NOTIFY

Services never call a backend directly; every call goes through
``store_call`` so it is bounded by the configured timeout and failures
arrive as CampusSportsError.
"""

import asyncio
import copy
import inspect
import itertools
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import (
    Any, Awaitable, Callable, Dict, List, Optional, Protocol, Tuple, TypeVar,
    runtime_checkable,
)

from core.errors import (
    CampusSportsError, ConflictError, NotFoundError, OperationTimeoutError, StoreError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Document = Dict[str, Any]
SnapshotCallback = Callable[[List[Document]], Any]


class _ServerTimestamp:
    """Placeholder replaced by the store's clock at write time"""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


# ====================
# Queries
# ====================

class FilterOp(str, Enum):
    EQ = "=="
    ARRAY_CONTAINS = "array_contains"


class Direction(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class FieldFilter:
    field: str
    op: FilterOp
    value: Any

    def matches(self, doc: Document) -> bool:
        actual = doc.get(self.field)
        if self.op == FilterOp.EQ:
            return actual == self.value
        if self.op == FilterOp.ARRAY_CONTAINS:
            return isinstance(actual, list) and self.value in actual
        return False


@dataclass(frozen=True)
class DocumentQuery:
    """Filter predicate plus order key and direction"""
    filters: Tuple[FieldFilter, ...] = ()
    order_by: Optional[str] = None
    direction: Direction = Direction.ASCENDING
    limit: Optional[int] = None

    def where(self, field_name: str, op: FilterOp, value: Any) -> "DocumentQuery":
        return DocumentQuery(
            filters=self.filters + (FieldFilter(field_name, op, value),),
            order_by=self.order_by,
            direction=self.direction,
            limit=self.limit,
        )

    def ordered(self, order_by: str, direction: Direction = Direction.ASCENDING) -> "DocumentQuery":
        return DocumentQuery(filters=self.filters, order_by=order_by, direction=direction, limit=self.limit)

    def matches(self, doc: Document) -> bool:
        return all(f.matches(doc) for f in self.filters)

    def apply(self, docs: List[Document]) -> List[Document]:
        """Filter, order and limit documents (input order breaks ties)"""
        result = [d for d in docs if self.matches(d)]
        if self.order_by:
            present = [d for d in result if d.get(self.order_by) is not None]
            missing = [d for d in result if d.get(self.order_by) is None]
            present.sort(
                key=lambda d: d[self.order_by],
                reverse=self.direction == Direction.DESCENDING,
            )
            result = present + missing
        if self.limit is not None:
            result = result[: self.limit]
        return result


# ====================
# Transactions
# ====================

@dataclass
class TransactionWrite:
    """Write decided inside a transaction: field changes or a delete"""
    changes: Dict[str, Any] = field(default_factory=dict)
    delete: bool = False

    @classmethod
    def update(cls, changes: Dict[str, Any]) -> "TransactionWrite":
        return cls(changes=changes)

    @classmethod
    def remove(cls) -> "TransactionWrite":
        return cls(delete=True)


@dataclass
class TransactionOutcome:
    """Committed document before and after the transaction"""
    before: Optional[Document]
    after: Optional[Document]


TransactionFn = Callable[[Optional[Document]], Optional[TransactionWrite]]


# ====================
# Protocol
# ====================

@runtime_checkable
class Subscription(Protocol):
    def unsubscribe(self) -> None:
        """Stop delivery; safe to call more than once"""
        ...


@runtime_checkable
class DocumentStore(Protocol):
    """Reactive document store interface"""

    async def create(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        ...

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    async def update(self, collection: str, doc_id: str, changes: Dict[str, Any]) -> None:
        ...

    async def delete(self, collection: str, doc_id: str) -> None:
        ...

    async def transaction(self, collection: str, doc_id: str, fn: TransactionFn) -> TransactionOutcome:
        """
        Atomic read-modify-write of one document.

        ``fn`` receives the committed document (or None) and returns the
        write to apply, or None for no write. Exceptions raised by ``fn``
        abort without writing.
        """
        ...

    async def query(self, collection: str, query: DocumentQuery) -> List[Document]:
        ...

    async def subscribe(
        self, collection: str, query: DocumentQuery, callback: SnapshotCallback
    ) -> Subscription:
        """Deliver the current result set now and after every change"""
        ...

    async def close(self) -> None:
        ...


# ====================
# Call helper
# ====================

async def store_call(awaitable: Awaitable[T], timeout: Optional[float], operation: str) -> T:
    """Await a store call with a timeout, mapping failures onto the error taxonomy"""
    try:
        if timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout)
    except asyncio.TimeoutError:
        logger.error(f"Store call {operation} timed out after {timeout}s")
        raise OperationTimeoutError(f"{operation} did not complete within {timeout:g}s", operation=operation)
    except CampusSportsError:
        raise
    except Exception as e:
        logger.error(f"Store call {operation} failed: {e}")
        raise StoreError(str(e) or e.__class__.__name__, operation=operation) from e


async def _deliver(callback: SnapshotCallback, docs: List[Document]) -> None:
    result = callback(docs)
    if inspect.isawaitable(result):
        await result


class DocumentNotFoundError(NotFoundError):
    default_code = "document_not_found"


class DocumentExistsError(ConflictError):
    default_code = "document_exists"


# ====================
# In-memory backend
# ====================

class _MemorySubscription:
    def __init__(self, store: "InMemoryDocumentStore", sub_id: int):
        self._store = store
        self._sub_id = sub_id
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._store._subscriptions.pop(self._sub_id, None)


class InMemoryDocumentStore:
    """
    Process-local reactive store.

    Transactions hold a per-document lock across read and write, so
    concurrent writers to one document serialize. ``latency`` simulates the
    round trip of a remote backend on every call.
    """

    def __init__(self, latency: float = 0.0):
        self.latency = latency
        self._collections: Dict[str, Dict[str, Document]] = {}
        self._locks: Dict[Tuple[str, str], asyncio.Lock] = {}
        self._subscriptions: Dict[int, Tuple[str, DocumentQuery, SnapshotCallback, _MemorySubscription]] = {}
        self._sub_ids = itertools.count(1)
        self._last_timestamp: Optional[datetime] = None

    # ---- helpers ----

    async def _round_trip(self) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)
        else:
            await asyncio.sleep(0)

    def _now(self) -> datetime:
        now = datetime.now(timezone.utc)
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    def _resolve(self, data: Dict[str, Any]) -> Dict[str, Any]:
        now = None
        resolved = {}
        for key, value in data.items():
            if value is SERVER_TIMESTAMP:
                now = now or self._now()
                value = now
            resolved[key] = copy.deepcopy(value)
        return resolved

    def _lock(self, collection: str, doc_id: str) -> asyncio.Lock:
        key = (collection, doc_id)
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    def _docs(self, collection: str) -> Dict[str, Document]:
        return self._collections.setdefault(collection, {})

    def _snapshot(self, collection: str, doc_id: str) -> Optional[Document]:
        doc = self._docs(collection).get(doc_id)
        if doc is None:
            return None
        return {**copy.deepcopy(doc), "id": doc_id}

    def _all(self, collection: str) -> List[Document]:
        return [{**copy.deepcopy(d), "id": i} for i, d in self._docs(collection).items()]

    async def _notify(self, collection: str) -> None:
        for sub_id, (coll, query, callback, handle) in list(self._subscriptions.items()):
            if coll != collection or not handle.active:
                continue
            try:
                await _deliver(callback, query.apply(self._all(collection)))
            except Exception as e:
                logger.error(f"Snapshot listener {sub_id} on {collection} failed: {e}")

    # ---- DocumentStore ----

    async def create(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        await self._round_trip()
        doc_id = doc_id or uuid.uuid4().hex
        docs = self._docs(collection)
        if doc_id in docs:
            raise DocumentExistsError(f"Document {collection}/{doc_id} already exists")
        body = {k: v for k, v in data.items() if k != "id"}
        docs[doc_id] = self._resolve(body)
        await self._notify(collection)
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        await self._round_trip()
        return self._snapshot(collection, doc_id)

    async def update(self, collection: str, doc_id: str, changes: Dict[str, Any]) -> None:
        await self._round_trip()
        async with self._lock(collection, doc_id):
            docs = self._docs(collection)
            if doc_id not in docs:
                raise DocumentNotFoundError(f"Document {collection}/{doc_id} not found")
            docs[doc_id].update(self._resolve(changes))
        await self._notify(collection)

    async def delete(self, collection: str, doc_id: str) -> None:
        await self._round_trip()
        async with self._lock(collection, doc_id):
            removed = self._docs(collection).pop(doc_id, None)
        if removed is not None:
            await self._notify(collection)

    async def transaction(self, collection: str, doc_id: str, fn: TransactionFn) -> TransactionOutcome:
        async with self._lock(collection, doc_id):
            await self._round_trip()
            before = self._snapshot(collection, doc_id)
            write = fn(copy.deepcopy(before) if before is not None else None)
            await self._round_trip()
            if write is None:
                return TransactionOutcome(before=before, after=before)
            docs = self._docs(collection)
            if write.delete:
                docs.pop(doc_id, None)
                after = None
            else:
                if doc_id not in docs:
                    raise DocumentNotFoundError(f"Document {collection}/{doc_id} not found")
                docs[doc_id].update(self._resolve(write.changes))
                after = self._snapshot(collection, doc_id)
        await self._notify(collection)
        return TransactionOutcome(before=before, after=after)

    async def query(self, collection: str, query: DocumentQuery) -> List[Document]:
        await self._round_trip()
        return query.apply(self._all(collection))

    async def subscribe(
        self, collection: str, query: DocumentQuery, callback: SnapshotCallback
    ) -> Subscription:
        await self._round_trip()
        sub_id = next(self._sub_ids)
        handle = _MemorySubscription(self, sub_id)
        self._subscriptions[sub_id] = (collection, query, callback, handle)
        await _deliver(callback, query.apply(self._all(collection)))
        return handle

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    async def close(self) -> None:
        for _, _, _, handle in list(self._subscriptions.values()):
            handle.unsubscribe()


__all__ = [
    "Document",
    "SERVER_TIMESTAMP",
    "FilterOp",
    "Direction",
    "FieldFilter",
    "DocumentQuery",
    "TransactionWrite",
    "TransactionOutcome",
    "Subscription",
    "DocumentStore",
    "DocumentNotFoundError",
    "DocumentExistsError",
    "InMemoryDocumentStore",
    "store_call",
]
