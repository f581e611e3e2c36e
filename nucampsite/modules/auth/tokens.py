"""
Signed bearer tokens.

Tokens are HS256 JWTs carrying ``{"_id": user_id, "iat", "exp"}`` with a
fixed one hour lifetime. They are stateless: nothing is stored, and a
token stays valid until it expires.
"""

import logging
import time
from typing import Callable

import jwt

from ...errors import Expired, InvalidSignature

logger = logging.getLogger(__name__)

TOKEN_LIFETIME_SECONDS = 3600


class TokenService:
    """
    Issues and verifies bearer tokens.

    The clock is injectable so expiry can be checked against a known time;
    signature checks are done by PyJWT and expiry is checked here against
    that clock.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            secret_key: Process-wide signing secret, loaded once at startup
            algorithm: JWT signing algorithm
            clock: Returns the current time in seconds since the epoch
        """
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: str) -> str:
        """
        Issue a token for a user.

        Args:
            user_id: Id of the authenticated user

        Returns:
            Encoded token string
        """
        issued_at = int(self._clock())
        payload = {
            "_id": user_id,
            "iat": issued_at,
            "exp": issued_at + TOKEN_LIFETIME_SECONDS,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        """
        Verify a token and return the user id it carries.

        Args:
            token: Encoded token (without the "Bearer " prefix)

        Returns:
            The embedded user id

        Raises:
            InvalidSignature: signature mismatch or malformed token
            Expired: current time is at or past the embedded expiry
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={
                    "verify_signature": True,
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["_id", "iat", "exp"],
                },
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            raise InvalidSignature() from e

        if self._clock() >= payload["exp"]:
            logger.debug(f"Token for user {payload['_id']} expired")
            raise Expired()

        return payload["_id"]
