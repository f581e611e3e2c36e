"""Authentication interfaces following Black Box Design principles."""
from dataclasses import dataclass
from typing import List, Optional, Protocol

from ..api.models import User


@dataclass(frozen=True)
class ExternalProfile:
    """Verified profile returned by a third-party identity provider."""
    id: str
    display_name: str
    given_name: str = ""
    family_name: str = ""


class CredentialStore(Protocol):
    """Protocol for user persistence - allows swappable implementations."""

    async def find_by_id(self, user_id: str) -> Optional[User]:
        ...

    async def find_by_username(self, username: str) -> Optional[User]:
        ...

    async def find_by_facebook_id(self, facebook_id: str) -> Optional[User]:
        ...

    async def create(self, user: User) -> User:
        """
        Persist a new user.

        Raises:
            UsernameTaken: if the username is already registered
        """
        ...

    async def save(self, user: User) -> User:
        ...

    async def list_users(self) -> List[User]:
        ...


class ProfileProvider(Protocol):
    """Protocol for third-party identity providers."""

    async def fetch_profile(self, access_token: str) -> ExternalProfile:
        """
        Exchange a provider access token for a verified profile.

        Raises:
            ProviderError: if the exchange fails for any reason
        """
        ...
