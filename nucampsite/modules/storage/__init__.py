"""
Storage Module - Black Box Interface

Purpose: Abstract all data persistence
Interface: connect(), disconnect(), DocumentStore.get/put/delete/all/clear
Hidden: Redis specifics, connection pooling, serialization

Can be replaced with any storage backend without affecting other modules.
"""

from typing import Optional

import redis.asyncio as redis

from ...config.provider import StorageConfig
from .documents import DocumentStore, utcnow


class StorageModule:
    """Black box storage abstraction."""

    def __init__(self, config: StorageConfig):
        """Initialize storage with connection settings."""
        self.url = config.url
        self.password = config.password
        self._client: Optional[redis.Redis] = None

    async def connect(self) -> redis.Redis:
        """Get storage connection."""
        if not self._client:
            self._client = redis.from_url(
                self.url,
                password=self.password,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def disconnect(self):
        """Close storage connection."""
        if self._client:
            await self._client.aclose()
            self._client = None


__all__ = ["StorageModule", "DocumentStore", "utcnow"]
