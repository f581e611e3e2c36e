"""
Username/password authentication against the credential store.

Passwords are hashed with passlib's salted ``pbkdf2_sha256``; the salt is
embedded in the stored hash string and verification is constant-time.
"""

import logging
from typing import Optional

from passlib.context import CryptContext

from ...errors import BadCredentials, UserNotFound, UsernameTaken
from ..api.models import User
from .interfaces import CredentialStore

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Return a salted one-way hash for ``password``."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify ``plain_password`` against a stored hash.

    A missing hash (account created through Facebook login) never matches,
    but still costs a full verification.
    """
    if not hashed_password:
        pwd_context.dummy_verify()
        return False
    return pwd_context.verify(plain_password, hashed_password)


class LocalAuthenticator:
    """Verifies local credentials and registers local users."""

    def __init__(self, store: CredentialStore):
        self.store = store

    async def authenticate(self, username: str, password: str) -> User:
        """
        Authenticate a username/password pair.

        Returns:
            The matching user

        Raises:
            UserNotFound: no user with that username
            BadCredentials: password does not match
        """
        user = await self.store.find_by_username(username)
        if user is None:
            # Same work as a real check so unknown usernames are not cheaper
            pwd_context.dummy_verify()
            raise UserNotFound()

        if not verify_password(password, user.hash):
            logger.info(f"Bad password for user {username}")
            raise BadCredentials()

        return user

    async def register(
        self,
        username: str,
        password: str,
        firstname: Optional[str] = None,
        lastname: Optional[str] = None,
    ) -> User:
        """
        Register a new local user and authenticate it.

        Args:
            username: Requested unique username
            password: Plaintext password, hashed before storage
            firstname: Optional profile field
            lastname: Optional profile field

        Returns:
            The newly stored user, already authenticated

        Raises:
            UsernameTaken: username already registered (store is unchanged)
        """
        if await self.store.find_by_username(username) is not None:
            raise UsernameTaken()

        user = User(
            username=username,
            hash=get_password_hash(password),
            firstname=firstname or "",
            lastname=lastname or "",
        )
        await self.store.create(user)
        logger.info(f"Registered user {username}")

        # Confirms the stored record round-trips before a token is issued
        return await self.authenticate(username, password)
