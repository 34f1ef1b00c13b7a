"""
Profile Service Data Repository

Data access layer over the reactive document store (``users`` collection)
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from core.document_store import (
    SERVER_TIMESTAMP,
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentQuery,
    DocumentStore,
    FilterOp,
    Subscription,
    store_call,
)
from core.errors import StoreError

from .models import UserProfile
from .protocols import ProfileAlreadyExistsError, ProfileNotFoundError

logger = logging.getLogger(__name__)


class ProfileRepository:
    """Profile repository - document store"""

    collection = "users"

    def __init__(self, store: DocumentStore, operation_timeout: Optional[float] = 15.0):
        self.store = store
        self.operation_timeout = operation_timeout

    async def get_profile(self, identity: str) -> Optional[UserProfile]:
        doc = await store_call(
            self.store.get(self.collection, identity),
            self.operation_timeout,
            "get_profile",
        )
        if not doc:
            return None
        try:
            return UserProfile.from_document(doc)
        except ValueError as e:
            logger.error(f"Malformed profile document {identity}: {e}")
            raise StoreError(f"Profile {identity} is unreadable", code="malformed_document", operation="get_profile")

    async def create_profile(self, profile: UserProfile) -> UserProfile:
        data = profile.to_document()
        data["created_at"] = SERVER_TIMESTAMP
        try:
            await store_call(
                self.store.create(self.collection, data, doc_id=profile.id),
                self.operation_timeout,
                "create_profile",
            )
        except DocumentExistsError:
            raise ProfileAlreadyExistsError(f"Profile already exists for {profile.id}")
        created = await self.get_profile(profile.id)
        return created or profile

    async def update_profile(self, identity: str, changes: Dict[str, Any]) -> UserProfile:
        try:
            await store_call(
                self.store.update(self.collection, identity, changes),
                self.operation_timeout,
                "update_profile",
            )
        except DocumentNotFoundError:
            raise ProfileNotFoundError(f"Profile not found for {identity}")
        updated = await self.get_profile(identity)
        if updated is None:
            raise ProfileNotFoundError(f"Profile not found for {identity}")
        return updated

    async def watch_profile(
        self, identity: str, callback: Callable[[Optional[UserProfile]], Any]
    ) -> Subscription:
        query = DocumentQuery().where("id", FilterOp.EQ, identity)

        def on_snapshot(docs: List[Dict[str, Any]]):
            profile = None
            if docs:
                try:
                    profile = UserProfile.from_document(docs[0])
                except ValueError as e:
                    logger.error(f"Error parsing profile {identity}: {e}")
            return callback(profile)

        return await store_call(
            self.store.subscribe(self.collection, query, on_snapshot),
            self.operation_timeout,
            "watch_profile",
        )
