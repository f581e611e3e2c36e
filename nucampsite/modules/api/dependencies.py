"""
FastAPI dependencies shared by the routers.

Modules are created at startup and kept on ``app.state``; the getters
below hand them to route handlers. ``verify_user`` and ``verify_admin``
are the authentication and admin gates.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from fastapi.responses import PlainTextResponse

from ..api.models import User
from ..auth import AuthService, require_admin
from ..campsites import CampsiteModule
from ..favorites import FavoriteModule
from ..session import SessionModule
from ..users import UserStore


def _module(request: Request, name: str):
    module = getattr(request.app.state, name, None)
    if module is None:
        raise HTTPException(503, "Service not initialized")
    return module


def get_auth_service(request: Request) -> AuthService:
    return _module(request, "auth_service")


def get_user_store(request: Request) -> UserStore:
    return _module(request, "user_store")


def get_session_module(request: Request) -> SessionModule:
    return _module(request, "session_module")


def get_campsite_module(request: Request) -> CampsiteModule:
    return _module(request, "campsite_module")


def get_favorite_module(request: Request) -> FavoriteModule:
    return _module(request, "favorite_module")


async def verify_user(
    authorization: Optional[str] = Header(None, description="Bearer token for authentication"),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Require a valid bearer token.

    Returns:
        The authenticated user

    Raises:
        Unauthenticated (401)
    """
    return await auth_service.authenticate_bearer(authorization)


async def verify_admin(user: User = Depends(verify_user)) -> User:
    """Require an authenticated admin. Raises Forbidden (403)."""
    require_admin(user)
    return user


def not_supported(method: str, path: str) -> PlainTextResponse:
    """Answer for verbs a path does not support."""
    return PlainTextResponse(f"{method} operation not supported on {path}", status_code=403)
