"""
Facebook login.

The client obtains a Facebook access token on its own and hands it to us.
We exchange it for the user's profile via the Graph API, then link the
Facebook identity to a local user, creating one on first login.
"""

import hashlib
import hmac
import logging
from typing import Optional

import httpx

from ...config.provider import FacebookConfig
from ...errors import ProviderError, UsernameTaken
from ..api.models import User
from .interfaces import CredentialStore, ExternalProfile, ProfileProvider

logger = logging.getLogger(__name__)

PROFILE_FIELDS = "id,name,first_name,last_name"


class FacebookProfileProvider(ProfileProvider):
    """
    Exchanges access tokens for verified Facebook profiles.

    This class is a black box that:
    - Calls the Graph API profile endpoint
    - Signs the call with appsecret_proof when a secret is configured
    - Maps the response onto ExternalProfile
    """

    def __init__(self, config: FacebookConfig, http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize provider with injected config.

        Args:
            config: Facebook configuration object
            http_client: Shared async HTTP client; a short-lived one is used if None
        """
        self.config = config
        self.http_client = http_client

    def appsecret_proof(self, access_token: str) -> str:
        """HMAC-SHA256 of the access token keyed by the app secret."""
        return hmac.new(
            self.config.client_secret.encode("utf-8"),
            access_token.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    async def fetch_profile(self, access_token: str) -> ExternalProfile:
        """
        Fetch the profile that ``access_token`` was issued for.

        Args:
            access_token: Facebook user access token

        Returns:
            Verified external profile

        Raises:
            ProviderError: not configured, transport failure, or rejected token
        """
        if not self.config.is_configured:
            raise ProviderError("Facebook login is not configured")
        if not access_token:
            raise ProviderError("You should provide access_token")

        params = {"fields": PROFILE_FIELDS, "access_token": access_token}
        if self.config.client_secret:
            params["appsecret_proof"] = self.appsecret_proof(access_token)

        try:
            if self.http_client is not None:
                response = await self.http_client.get(
                    self.config.profile_url, params=params, timeout=self.config.timeout_seconds
                )
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                    response = await client.get(self.config.profile_url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Facebook profile request failed: {e}")
            raise ProviderError("Failed to fetch user profile") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.status_code >= 400 or "error" in body:
            message = body.get("error", {}).get("message") if isinstance(body.get("error"), dict) else None
            logger.warning(f"Facebook rejected access token ({response.status_code}): {message}")
            raise ProviderError(message or "Failed to fetch user profile")

        if not body.get("id"):
            raise ProviderError("Facebook profile has no id")
        if not body.get("name"):
            raise ProviderError("Facebook profile has no name")

        return ExternalProfile(
            id=str(body["id"]),
            display_name=body["name"],
            given_name=body.get("first_name") or "",
            family_name=body.get("last_name") or "",
        )


class FacebookAuthenticator:
    """Resolves a Facebook access token to a local user."""

    def __init__(self, store: CredentialStore, provider: ProfileProvider):
        self.store = store
        self.provider = provider

    async def authenticate_external(self, access_token: str) -> User:
        """
        Log in with a Facebook access token.

        Returns:
            The linked user, created on first login

        Raises:
            ProviderError: the token exchange failed
            UsernameTaken: a new user's display name collides with an existing username
        """
        profile = await self.provider.fetch_profile(access_token)

        user = await self.store.find_by_facebook_id(profile.id)
        if user is not None:
            return user

        # Display name is used as-is; collisions are rejected by the store
        user = User(
            username=profile.display_name,
            facebook_id=profile.id,
            firstname=profile.given_name,
            lastname=profile.family_name,
        )
        try:
            user = await self.store.create(user)
        except UsernameTaken:
            logger.warning(
                f"Facebook display name {profile.display_name!r} is already a username; "
                f"cannot create user for Facebook id {profile.id}"
            )
            raise
        logger.info(f"Created user {user.username} for Facebook id {profile.id}")
        return user
