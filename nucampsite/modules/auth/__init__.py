"""
Authentication Module - Black Box Interface

Purpose: Issue and verify tokens, authenticate users, authorize operations
Interface: AuthFactory.build(), AuthService, TokenService, guard checks
Hidden: Token format, password hashing, provider exchange

This module can be completely replaced with any other auth implementation
(sessions, external identity service) without affecting other modules.
"""

from .factory import AuthFactory
from .guard import (
    authorize_comment_delete,
    authorize_comment_edit,
    require_admin,
    require_owner,
    require_owner_or_admin,
)
from .service import AuthService, LoginResult
from .tokens import TOKEN_LIFETIME_SECONDS, TokenService

__all__ = [
    "AuthFactory",
    "AuthService",
    "LoginResult",
    "TokenService",
    "TOKEN_LIFETIME_SECONDS",
    "authorize_comment_delete",
    "authorize_comment_edit",
    "require_admin",
    "require_owner",
    "require_owner_or_admin",
]
