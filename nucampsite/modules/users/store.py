"""
Credential store for user documents.

Users are JSON documents under ``user:{id}``. Two index keys map the
unique identities back to the document id:

- ``user:username:{username}``
- ``user:facebook:{facebookId}``

Index keys are claimed with ``SET NX`` so uniqueness holds even when two
registrations race.
"""

import logging
from typing import List, Optional

from redis.exceptions import RedisError

from ...errors import StorageError, UsernameTaken
from ..api.models import User
from ..storage import DocumentStore

logger = logging.getLogger(__name__)


class UserStore:
    """Find, create and save users."""

    def __init__(self, redis_client):
        """
        Initialize user store.

        Args:
            redis_client: Async Redis client from API Core
        """
        self.redis = redis_client
        self.documents = DocumentStore(redis_client, "user")

    @staticmethod
    def _username_key(username: str) -> str:
        return f"user:username:{username}"

    @staticmethod
    def _facebook_key(facebook_id: str) -> str:
        return f"user:facebook:{facebook_id}"

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Load a user by document id.

        Returns:
            User or None if not found
        """
        doc = await self.documents.get(user_id)
        if doc is None:
            return None
        return User.model_validate(doc)

    async def find_by_username(self, username: str) -> Optional[User]:
        """Load a user by exact username."""
        user_id = await self._lookup(self._username_key(username))
        if not user_id:
            return None
        return await self.find_by_id(user_id)

    async def find_by_facebook_id(self, facebook_id: str) -> Optional[User]:
        """Load the user linked to a Facebook identity."""
        user_id = await self._lookup(self._facebook_key(facebook_id))
        if not user_id:
            return None
        return await self.find_by_id(user_id)

    async def create(self, user: User) -> User:
        """
        Persist a new user.

        Args:
            user: User to insert

        Returns:
            The stored user

        Raises:
            UsernameTaken: username already belongs to another user
            StorageError: store failure, or the Facebook id is already linked

        Logic:
        1. Claim the username index (fails if taken)
        2. Claim the Facebook index if an identity is present
        3. Write the document
        Claims made before a failure are released so the store is unchanged.
        """
        username_key = self._username_key(user.username)
        claimed = []
        try:
            if not await self.redis.set(username_key, user.id, nx=True):
                raise UsernameTaken()
            claimed.append(username_key)

            if user.facebook_id:
                facebook_key = self._facebook_key(user.facebook_id)
                if not await self.redis.set(facebook_key, user.id, nx=True):
                    raise StorageError(f"Facebook identity {user.facebook_id} is already linked")
                claimed.append(facebook_key)

            await self.documents.put(user.to_document())
        except (UsernameTaken, StorageError):
            await self._release(claimed)
            raise
        except RedisError as e:
            await self._release(claimed)
            logger.error(f"Failed to create user {user.username}: {e}")
            raise StorageError("Failed to create user") from e

        logger.info(f"Created user {user.username} ({user.id})")
        return user

    async def save(self, user: User) -> User:
        """
        Persist changes to an existing user.

        Username changes are not supported here; a newly linked Facebook
        identity is indexed.
        """
        if user.facebook_id:
            try:
                await self.redis.set(self._facebook_key(user.facebook_id), user.id)
            except RedisError as e:
                logger.error(f"Failed to index user {user.id}: {e}")
                raise StorageError("Failed to save user") from e

        await self.documents.put(user.to_document())
        return user

    async def list_users(self) -> List[User]:
        """All users, oldest first."""
        return [User.model_validate(doc) for doc in await self.documents.all()]

    async def _lookup(self, index_key: str) -> Optional[str]:
        try:
            return await self.redis.get(index_key)
        except RedisError as e:
            logger.error(f"Failed to read index {index_key}: {e}")
            raise StorageError("Failed to read user index") from e

    async def _release(self, keys: List[str]) -> None:
        if not keys:
            return
        try:
            await self.redis.delete(*keys)
        except RedisError as e:
            logger.error(f"Failed to release index keys {keys}: {e}")
