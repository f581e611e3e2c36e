"""
Config - Black Box Interface

Purpose: Typed application configuration
Interface: ConfigProvider protocol, EnvConfigProvider
Hidden: Config sources, environment parsing

Can be replaced with different config systems (files, Consul, Parameter Store).
"""

from .provider import (
    APIConfig,
    AuthConfig,
    ConfigProvider,
    EnvConfigProvider,
    FacebookConfig,
    StorageConfig,
)

__all__ = [
    "APIConfig",
    "AuthConfig",
    "ConfigProvider",
    "EnvConfigProvider",
    "FacebookConfig",
    "StorageConfig",
]
