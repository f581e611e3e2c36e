"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol, List


DEFAULT_FACEBOOK_PROFILE_URL = "https://graph.facebook.com/v19.0/me"


@dataclass(frozen=True)
class AuthConfig:
    """Authentication configuration."""
    secret_key: str
    algorithm: str = "HS256"


@dataclass(frozen=True)
class FacebookConfig:
    """Facebook login configuration."""
    client_id: Optional[str]
    client_secret: Optional[str]
    profile_url: str = DEFAULT_FACEBOOK_PROFILE_URL
    timeout_seconds: float = 10.0

    @property
    def is_configured(self) -> bool:
        """Check if Facebook login is properly configured."""
        return bool(self.client_id)


@dataclass(frozen=True)
class StorageConfig:
    """Redis document store configuration."""
    host: str
    port: int
    db: int
    password: Optional[str]

    @property
    def url(self) -> str:
        # Password is passed separately to avoid URL encoding issues
        return f"redis://{self.host}:{self.port}/{self.db}"


@dataclass(frozen=True)
class APIConfig:
    """API configuration."""
    port: int
    host: str
    debug: bool
    log_level: str
    cors_origins: List[str]
    session_ttl: int
    session_cookie_name: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration."""
        ...

    def get_facebook_config(self) -> FacebookConfig:
        """Get Facebook login configuration."""
        ...

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration from environment variables."""
        # Signing secret is required - no default for security
        secret_key = os.getenv("SECRET_KEY")
        if not secret_key:
            raise ValueError(
                "SECRET_KEY environment variable is required. "
                "Set it to a long random string used to sign bearer tokens."
            )

        return AuthConfig(secret_key=secret_key)

    def get_facebook_config(self) -> FacebookConfig:
        """Get Facebook login configuration from environment variables."""
        return FacebookConfig(
            client_id=os.getenv("FACEBOOK_CLIENT_ID"),
            client_secret=os.getenv("FACEBOOK_CLIENT_SECRET"),
            profile_url=os.getenv("FACEBOOK_PROFILE_URL", DEFAULT_FACEBOOK_PROFILE_URL),
            timeout_seconds=float(os.getenv("FACEBOOK_TIMEOUT_SECONDS", "10")),
        )

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration from environment variables."""
        # Redis port might be in tcp://host:port format from K8s
        redis_port_env = os.getenv("REDIS_PORT", "6379")
        if redis_port_env.startswith("tcp://"):
            redis_port = int(redis_port_env.split(":")[-1])
        else:
            redis_port = int(redis_port_env)

        return StorageConfig(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=redis_port,
            db=int(os.getenv("REDIS_DB", "0")),
            password=os.getenv("REDIS_PASSWORD"),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("API_PORT", "3000")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=os.getenv("CORS_ORIGINS", "*").split(","),
            session_ttl=int(os.getenv("SESSION_TTL", "3600")),
            session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "session-id"),
        )
