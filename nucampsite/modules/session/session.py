import json
import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import List, Optional

logger = logging.getLogger(__name__)


class SessionModule:
    def __init__(self, redis_client, default_ttl: int = 3600):
        """
        Initialize session module.

        Args:
            redis_client: Async Redis client
            default_ttl: Default session TTL in seconds (1 hour)
        """
        self.redis = redis_client
        self.default_ttl = default_ttl

    async def create_session(self, user_id: str) -> str:
        """
        Open a login session for a user.

        Args:
            user_id: Id of the logged-in user

        Returns:
            Session ID (unguessable, safe to put in a cookie)

        Logic:
        1. Generate a random session id
        2. Store session data with TTL
        3. Add to active sessions set
        """
        session_id = secrets.token_urlsafe(32)

        now = datetime.now(UTC)
        session_data = {
            "session_id": session_id,
            "user_id": user_id,
            "created_at": now.isoformat(),
            "expires_at": (now + timedelta(seconds=self.default_ttl)).isoformat(),
        }

        session_key = f"session:{session_id}"
        await self.redis.setex(session_key, self.default_ttl, json.dumps(session_data))
        await self.redis.sadd("sessions:active", session_id)

        logger.debug(f"Session created for user {user_id}")
        return session_id

    async def get_session(self, session_id: str) -> Optional[dict]:
        """
        Get session details.

        Args:
            session_id: Session identifier

        Returns:
            Session data dict or None if not found or expired
        """
        if not session_id:
            return None

        data = await self.redis.get(f"session:{session_id}")
        if data:
            return json.loads(data)
        return None

    async def end_session(self, session_id: str) -> bool:
        """
        Destroy a session.

        Returns:
            True if a session existed and was destroyed
        """
        session = await self.get_session(session_id)
        if not session:
            return False

        await self.redis.delete(f"session:{session_id}")
        await self.redis.srem("sessions:active", session_id)

        logger.debug(f"Session ended for user {session['user_id']}")
        return True

    async def get_active_sessions(self) -> List[dict]:
        """
        Get all active sessions.

        Used for monitoring/admin purposes.

        Returns:
            List of active session data
        """
        session_ids = await self.redis.smembers("sessions:active")

        sessions = []
        for session_id in session_ids:
            data = await self.redis.get(f"session:{session_id}")

            if data:
                sessions.append(json.loads(data))
            else:
                # Clean up stale entry
                await self.redis.srem("sessions:active", session_id)

        return sessions
