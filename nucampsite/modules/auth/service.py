"""
Authentication Service Facade following Black Box Design principles.

This module provides:
- A clean interface for authentication that hides implementation details
- Standardized login results
- An audit trail of security events
"""

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Optional

from redis.exceptions import RedisError

from ...errors import AuthError, Unauthenticated
from ..api.models import User
from .facebook import FacebookAuthenticator
from .interfaces import CredentialStore
from .local import LocalAuthenticator
from .tokens import TokenService

logger = logging.getLogger(__name__)

AUDIT_KEY = "auth:audit"
AUDIT_MAX_EVENTS = 10000


@dataclass
class LoginResult:
    """Standardized login result."""
    user: User
    token: str


class AuthService:
    """
    Facade over token, local and Facebook authentication.

    Route handlers only talk to this class; the individual authenticators
    stay replaceable behind it.
    """

    def __init__(
        self,
        store: CredentialStore,
        tokens: TokenService,
        local: LocalAuthenticator,
        facebook: FacebookAuthenticator,
        redis_client=None,
    ):
        """
        Args:
            store: Credential store used to resolve token subjects
            tokens: Token service
            local: Username/password authenticator
            facebook: Facebook authenticator
            redis_client: Optional async Redis client for audit logging
        """
        self.store = store
        self.tokens = tokens
        self.local = local
        self.facebook = facebook
        self.redis = redis_client

    async def register(
        self,
        username: str,
        password: str,
        firstname: Optional[str] = None,
        lastname: Optional[str] = None,
    ) -> User:
        """Register a local user. See LocalAuthenticator.register."""
        user = await self.local.register(username, password, firstname, lastname)
        await self._log_event("user_registered", {"user_id": user.id, "username": user.username})
        return user

    async def login(self, username: str, password: str) -> LoginResult:
        """
        Log in with local credentials and issue a token.

        Raises:
            UserNotFound, BadCredentials
        """
        try:
            user = await self.local.authenticate(username, password)
        except AuthError:
            await self._log_event("login_failed", {"username": username, "method": "local"})
            raise

        await self._log_event("login_succeeded", {"user_id": user.id, "method": "local"})
        return LoginResult(user=user, token=self.tokens.issue(user.id))

    async def login_facebook(self, access_token: str) -> LoginResult:
        """
        Log in with a Facebook access token and issue a token.

        Raises:
            ProviderError, UsernameTaken
        """
        user = await self.facebook.authenticate_external(access_token)
        await self._log_event(
            "login_succeeded",
            {"user_id": user.id, "method": "facebook", "facebook_id": user.facebook_id},
        )
        return LoginResult(user=user, token=self.tokens.issue(user.id))

    async def authenticate_bearer(self, authorization: Optional[str]) -> User:
        """
        Resolve an Authorization header to a user.

        Args:
            authorization: Raw header value ("Bearer <token>")

        Returns:
            The user the token refers to

        Raises:
            Unauthenticated: missing/invalid/expired token or unknown user
        """
        if not authorization or authorization[:7].lower() != "bearer ":
            raise Unauthenticated()

        token = authorization[7:].strip()
        try:
            user_id = self.tokens.verify(token)
        except AuthError as e:
            raise Unauthenticated(e.message) from e

        user = await self.store.find_by_id(user_id)
        if user is None:
            logger.warning(f"Valid token for unknown user {user_id}")
            raise Unauthenticated()
        return user

    async def _log_event(self, event_type: str, data: dict):
        """Log security event for audit."""
        logger.info(f"{event_type}: {data}")

        if not self.redis:
            return

        event = {
            "type": event_type,
            "data": data,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        try:
            await self.redis.lpush(AUDIT_KEY, json.dumps(event))
            await self.redis.ltrim(AUDIT_KEY, 0, AUDIT_MAX_EVENTS - 1)
        except RedisError as e:
            # Best effort
            logger.error(f"Failed to record audit event {event_type}: {e}")
