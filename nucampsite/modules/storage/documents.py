"""
JSON document collections on top of Redis.

Each document lives under ``{collection}:{id}`` and its id is a member of
``{collection}s:all``. Documents are plain dicts keyed by ``_id``.
"""

import json
import logging
from datetime import UTC, datetime
from typing import List, Optional

from redis.exceptions import RedisError

from ...errors import StorageError

logger = logging.getLogger(__name__)


def utcnow() -> str:
    """Timestamp format used for createdAt/updatedAt fields."""
    return datetime.now(UTC).isoformat()


class DocumentStore:
    """
    A named collection of JSON documents.

    Any Redis failure surfaces as StorageError so callers only deal with
    service errors.
    """

    def __init__(self, redis_client, collection: str):
        """
        Args:
            redis_client: Async Redis client (decode_responses=True)
            collection: Collection name, used as key prefix
        """
        self.redis = redis_client
        self.collection = collection
        self.index_key = f"{collection}s:all"

    def key(self, doc_id: str) -> str:
        return f"{self.collection}:{doc_id}"

    async def get(self, doc_id: str) -> Optional[dict]:
        """Load a document by id, or None if absent."""
        try:
            data = await self.redis.get(self.key(doc_id))
        except RedisError as e:
            logger.error(f"Failed to read {self.collection} {doc_id}: {e}")
            raise StorageError(f"Failed to read {self.collection}") from e

        if data:
            return json.loads(data)
        return None

    async def put(self, doc: dict, doc_id: Optional[str] = None) -> dict:
        """
        Insert or replace a document. Returns the stored document.

        The document is keyed by its ``_id`` unless ``doc_id`` is given.
        """
        doc_id = doc_id or doc["_id"]
        try:
            await self.redis.set(self.key(doc_id), json.dumps(doc))
            await self.redis.sadd(self.index_key, doc_id)
        except RedisError as e:
            logger.error(f"Failed to write {self.collection} {doc_id}: {e}")
            raise StorageError(f"Failed to write {self.collection}") from e
        return doc

    async def delete(self, doc_id: str) -> Optional[dict]:
        """Delete a document. Returns the deleted document, or None."""
        doc = await self.get(doc_id)
        if doc is None:
            return None

        try:
            await self.redis.delete(self.key(doc_id))
            await self.redis.srem(self.index_key, doc_id)
        except RedisError as e:
            logger.error(f"Failed to delete {self.collection} {doc_id}: {e}")
            raise StorageError(f"Failed to delete {self.collection}") from e
        return doc

    async def all(self) -> List[dict]:
        """Load every document in the collection, oldest first."""
        try:
            doc_ids = await self.redis.smembers(self.index_key)
        except RedisError as e:
            logger.error(f"Failed to list {self.collection}: {e}")
            raise StorageError(f"Failed to list {self.collection}") from e

        docs = []
        for doc_id in doc_ids:
            doc = await self.get(doc_id)
            if doc is not None:
                docs.append(doc)
            else:
                # Clean up stale entry
                try:
                    await self.redis.srem(self.index_key, doc_id)
                except RedisError as e:
                    logger.error(f"Failed to clean {self.collection} index: {e}")
                    raise StorageError(f"Failed to list {self.collection}") from e

        docs.sort(key=lambda d: d.get("createdAt", ""))
        return docs

    async def clear(self) -> int:
        """Delete every document in the collection. Returns the count."""
        try:
            doc_ids = await self.redis.smembers(self.index_key)
            deleted = 0
            if doc_ids:
                deleted = await self.redis.delete(*[self.key(doc_id) for doc_id in doc_ids])
            await self.redis.delete(self.index_key)
        except RedisError as e:
            logger.error(f"Failed to clear {self.collection}: {e}")
            raise StorageError(f"Failed to clear {self.collection}") from e
        return deleted
