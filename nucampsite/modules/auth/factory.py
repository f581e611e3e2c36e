"""
Authentication Factory following Black Box Design principles.

This factory:
- Constructs the authentication stack based on configuration
- Wires dependencies together
- Returns only the service facade (hiding implementation)
"""

import logging
from typing import Optional

import httpx

from ...config.provider import ConfigProvider
from .facebook import FacebookAuthenticator, FacebookProfileProvider
from .interfaces import CredentialStore
from .local import LocalAuthenticator
from .service import AuthService
from .tokens import TokenService

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Creates all auth components
    - Wires them together via dependency injection
    - Returns only the public interface
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        store: CredentialStore,
        redis_client=None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> AuthService:
        """
        Build the complete authentication stack.

        Args:
            config_provider: Configuration provider
            store: Credential store
            redis_client: Optional Redis client for audit logging
            http_client: Optional shared HTTP client for the identity provider

        Returns:
            AuthService facade (hides all implementation details)
        """
        auth_config = config_provider.get_auth_config()
        facebook_config = config_provider.get_facebook_config()

        tokens = TokenService(auth_config.secret_key, algorithm=auth_config.algorithm)
        local = LocalAuthenticator(store)

        if facebook_config.is_configured:
            logger.info("Building authentication stack with Facebook login")
        else:
            logger.info("Building authentication stack without Facebook login")
        provider = FacebookProfileProvider(facebook_config, http_client=http_client)
        facebook = FacebookAuthenticator(store, provider)

        return AuthService(
            store=store,
            tokens=tokens,
            local=local,
            facebook=facebook,
            redis_client=redis_client,
        )
