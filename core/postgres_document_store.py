"""
PostgreSQL Document Store

DocumentStore backed by a single JSONB table. Transactions lock the row
with ``SELECT ... FOR UPDATE``; live queries listen on a channel fed by a
row trigger and re-run the query whenever its collection changes.

Timestamps written through SERVER_TIMESTAMP come from ``clock_timestamp()``
and are stored as fixed-width ISO 8601 UTC strings so they order lexically.
"""

import asyncio
import inspect
import itertools
import json
import logging
import re
import uuid
from datetime import timezone
from typing import Any, Dict, List, Optional, Tuple

import asyncpg
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.document_store import (
    SERVER_TIMESTAMP,
    Direction,
    Document,
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentQuery,
    FilterOp,
    SnapshotCallback,
    Subscription,
    TransactionFn,
    TransactionOutcome,
)
from core.nats_client import DecimalEncoder
from core.postgres_client import PostgresClientWrapper

logger = logging.getLogger(__name__)

CHANGE_CHANNEL = "campus_documents"

_RETRYABLE = (
    asyncpg.exceptions.SerializationError,
    asyncpg.exceptions.DeadlockDetectedError,
)

_SCHEMA_SQL = """
CREATE SCHEMA IF NOT EXISTS {schema};

CREATE TABLE IF NOT EXISTS {schema}.documents (
    collection  TEXT        NOT NULL,
    doc_id      TEXT        NOT NULL,
    data        JSONB       NOT NULL,
    seq         BIGSERIAL,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp(),
    updated_at  TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp(),
    PRIMARY KEY (collection, doc_id)
);

CREATE INDEX IF NOT EXISTS documents_data_gin ON {schema}.documents USING GIN (data);

CREATE OR REPLACE FUNCTION {schema}.notify_document_change() RETURNS trigger AS $$
BEGIN
    PERFORM pg_notify('{channel}', COALESCE(NEW.collection, OLD.collection));
    RETURN NULL;
END;
$$ LANGUAGE plpgsql;

DROP TRIGGER IF EXISTS documents_notify ON {schema}.documents;
CREATE TRIGGER documents_notify
    AFTER INSERT OR UPDATE OR DELETE ON {schema}.documents
    FOR EACH ROW EXECUTE FUNCTION {schema}.notify_document_change();
"""


def _dumps(data: Dict[str, Any]) -> str:
    return json.dumps(data, cls=DecimalEncoder)


class _PostgresSubscription:
    def __init__(self, store: "PostgresDocumentStore", sub_id: int):
        self._store = store
        self._sub_id = sub_id
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._store._subscriptions.pop(self._sub_id, None)


class PostgresDocumentStore:
    """DocumentStore over asyncpg"""

    def __init__(self, client: PostgresClientWrapper, schema: str = "campus"):
        if not re.fullmatch(r"[a-z_][a-z0-9_]*", schema):
            raise ValueError(f"Invalid schema name: {schema!r}")
        self.client = client
        self.schema = schema
        self.table = f"{schema}.documents"
        self._listener: Optional[asyncpg.Connection] = None
        self._subscriptions: Dict[int, Tuple[str, DocumentQuery, SnapshotCallback, _PostgresSubscription]] = {}
        self._sub_ids = itertools.count(1)
        self._refresh_locks: Dict[str, asyncio.Lock] = {}
        self._tasks: set = set()

    async def initialize(self) -> None:
        """Create the table, trigger and listener connection"""
        await self.client.connect()
        await self.client.execute(_SCHEMA_SQL.format(schema=self.schema, channel=CHANGE_CHANNEL))
        self._listener = await self.client.acquire_listener()
        await self._listener.add_listener(CHANGE_CHANNEL, self._on_change)
        logger.info(f"PostgresDocumentStore ready on {self.table}")

    # ---- helpers ----

    @staticmethod
    async def _server_now(conn: asyncpg.Connection) -> str:
        ts = await conn.fetchval("SELECT clock_timestamp()")
        return ts.astimezone(timezone.utc).isoformat(timespec="microseconds")

    async def _resolve(self, conn: asyncpg.Connection, data: Dict[str, Any]) -> Dict[str, Any]:
        if not any(v is SERVER_TIMESTAMP for v in data.values()):
            return dict(data)
        now = await self._server_now(conn)
        return {k: (now if v is SERVER_TIMESTAMP else v) for k, v in data.items()}

    @staticmethod
    def _row_to_doc(row) -> Document:
        data = row["data"]
        if isinstance(data, str):
            data = json.loads(data)
        return {**data, "id": row["doc_id"]}

    def _compile(self, collection: str, query: DocumentQuery) -> Tuple[str, List[Any]]:
        params: List[Any] = [collection]
        clauses = ["collection = $1"]
        for f in query.filters:
            if f.field == "id" and f.op == FilterOp.EQ:
                params.append(f.value)
                clauses.append(f"doc_id = ${len(params)}")
            elif f.op == FilterOp.EQ:
                params.append(_dumps({f.field: f.value}))
                clauses.append(f"data @> ${len(params)}::jsonb")
            elif f.op == FilterOp.ARRAY_CONTAINS:
                params.append(f.field)
                key_ref = len(params)
                params.append(_dumps([f.value]))
                clauses.append(f"data -> ${key_ref}::text @> ${len(params)}::jsonb")
        sql = f"SELECT doc_id, data FROM {self.table} WHERE {' AND '.join(clauses)}"
        if query.order_by:
            params.append(query.order_by)
            direction = "DESC" if query.direction == Direction.DESCENDING else "ASC"
            sql += f" ORDER BY data -> ${len(params)}::text {direction} NULLS LAST, seq {direction}"
        else:
            sql += " ORDER BY seq ASC"
        if query.limit is not None:
            sql += f" LIMIT {int(query.limit)}"
        return sql, params

    # ---- DocumentStore ----

    async def create(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or uuid.uuid4().hex
        body = {k: v for k, v in data.items() if k != "id"}
        async with self.client.pool.acquire() as conn:
            resolved = await self._resolve(conn, body)
            try:
                await conn.execute(
                    f"INSERT INTO {self.table} (collection, doc_id, data) VALUES ($1, $2, $3::jsonb)",
                    collection, doc_id, _dumps(resolved),
                )
            except asyncpg.exceptions.UniqueViolationError:
                raise DocumentExistsError(f"Document {collection}/{doc_id} already exists")
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        row = await self.client.pool.fetchrow(
            f"SELECT doc_id, data FROM {self.table} WHERE collection = $1 AND doc_id = $2",
            collection, doc_id,
        )
        return self._row_to_doc(row) if row else None

    async def update(self, collection: str, doc_id: str, changes: Dict[str, Any]) -> None:
        async with self.client.pool.acquire() as conn:
            resolved = await self._resolve(conn, changes)
            status = await conn.execute(
                f"UPDATE {self.table} SET data = data || $3::jsonb, updated_at = clock_timestamp() "
                f"WHERE collection = $1 AND doc_id = $2",
                collection, doc_id, _dumps(resolved),
            )
        if status.endswith(" 0"):
            raise DocumentNotFoundError(f"Document {collection}/{doc_id} not found")

    async def delete(self, collection: str, doc_id: str) -> None:
        await self.client.pool.execute(
            f"DELETE FROM {self.table} WHERE collection = $1 AND doc_id = $2",
            collection, doc_id,
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
        retry=retry_if_exception_type(_RETRYABLE),
        reraise=True,
    )
    async def transaction(self, collection: str, doc_id: str, fn: TransactionFn) -> TransactionOutcome:
        async with self.client.pool.acquire() as conn:
            async with conn.transaction():
                row = await conn.fetchrow(
                    f"SELECT doc_id, data FROM {self.table} "
                    f"WHERE collection = $1 AND doc_id = $2 FOR UPDATE",
                    collection, doc_id,
                )
                before = self._row_to_doc(row) if row else None
                write = fn(dict(before) if before is not None else None)
                if write is None:
                    return TransactionOutcome(before=before, after=before)
                if write.delete:
                    await conn.execute(
                        f"DELETE FROM {self.table} WHERE collection = $1 AND doc_id = $2",
                        collection, doc_id,
                    )
                    return TransactionOutcome(before=before, after=None)
                if before is None:
                    raise DocumentNotFoundError(f"Document {collection}/{doc_id} not found")
                resolved = await self._resolve(conn, write.changes)
                row = await conn.fetchrow(
                    f"UPDATE {self.table} SET data = data || $3::jsonb, updated_at = clock_timestamp() "
                    f"WHERE collection = $1 AND doc_id = $2 RETURNING doc_id, data",
                    collection, doc_id, _dumps(resolved),
                )
                return TransactionOutcome(before=before, after=self._row_to_doc(row))

    async def query(self, collection: str, query: DocumentQuery) -> List[Document]:
        sql, params = self._compile(collection, query)
        rows = await self.client.pool.fetch(sql, *params)
        return [self._row_to_doc(r) for r in rows]

    async def subscribe(
        self, collection: str, query: DocumentQuery, callback: SnapshotCallback
    ) -> Subscription:
        sub_id = next(self._sub_ids)
        handle = _PostgresSubscription(self, sub_id)
        self._subscriptions[sub_id] = (collection, query, callback, handle)
        await self._deliver(sub_id)
        return handle

    # ---- live queries ----

    def _on_change(self, connection, pid, channel, payload) -> None:
        task = asyncio.ensure_future(self._refresh(payload))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _refresh(self, collection: str) -> None:
        lock = self._refresh_locks.setdefault(collection, asyncio.Lock())
        async with lock:
            for sub_id, (coll, _, _, _) in list(self._subscriptions.items()):
                if coll == collection:
                    await self._deliver(sub_id)

    async def _deliver(self, sub_id: int) -> None:
        entry = self._subscriptions.get(sub_id)
        if entry is None:
            return
        collection, query, callback, handle = entry
        try:
            docs = await self.query(collection, query)
            if not handle.active:
                return
            result = callback(docs)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Live query {sub_id} on {collection} failed: {e}")

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    async def close(self) -> None:
        for _, _, _, handle in list(self._subscriptions.values()):
            handle.unsubscribe()
        for task in list(self._tasks):
            task.cancel()
        if self._listener is not None:
            try:
                await self._listener.remove_listener(CHANGE_CHANNEL, self._on_change)
            finally:
                await self.client.release_listener(self._listener)
                self._listener = None
        await self.client.close()
        logger.info("PostgresDocumentStore closed")
