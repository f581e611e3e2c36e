"""
User endpoints: registration, local and Facebook login, logout.
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from ...config.provider import APIConfig
from ...errors import NotLoggedIn, StorageError, UsernameTaken
from ..auth import AuthService
from ..session import SessionModule
from ..users import UserStore
from .dependencies import (
    get_auth_service,
    get_session_module,
    get_user_store,
    verify_admin,
)
from .models import LoginRequest, LoginResponse, SignupRequest, SignupResponse, User

logger = logging.getLogger(__name__)


def create_users_router(api_config: APIConfig) -> APIRouter:
    """
    Create the /users router.

    Args:
        api_config: API configuration (session cookie name and TTL)

    Returns:
        FastAPI router with user endpoints
    """
    router = APIRouter(prefix="/users", tags=["users"])
    cookie_name = api_config.session_cookie_name

    async def open_session(response: Response, session_module: SessionModule, user: User) -> None:
        session_id = await session_module.create_session(user.id)
        response.set_cookie(
            cookie_name,
            session_id,
            max_age=session_module.default_ttl,
            httponly=True,
            samesite="lax",
        )

    @router.get("")
    async def list_users(
        admin: User = Depends(verify_admin),
        user_store: UserStore = Depends(get_user_store),
    ) -> List[Dict]:
        """List all users (admins only)."""
        return [user.public() for user in await user_store.list_users()]

    @router.post("/signup", response_model=SignupResponse)
    async def signup(
        body: SignupRequest,
        response: Response,
        auth_service: AuthService = Depends(get_auth_service),
        session_module: SessionModule = Depends(get_session_module),
    ):
        """
        Register a local user.

        Returns:
            200: {"success": true, "status": "Registration Successful!"}
            500: {"err": {"name", "message"}} when registration fails
        """
        try:
            user = await auth_service.register(
                body.username, body.password, firstname=body.firstname, lastname=body.lastname
            )
        except (UsernameTaken, StorageError) as e:
            logger.warning(f"Signup failed for {body.username}: {e.message}")
            return JSONResponse(status_code=500, content={"err": {"name": e.name, "message": e.message}})

        await open_session(response, session_module, user)
        return SignupResponse()

    @router.post("/login", response_model=LoginResponse)
    async def login(
        body: LoginRequest,
        response: Response,
        auth_service: AuthService = Depends(get_auth_service),
        session_module: SessionModule = Depends(get_session_module),
    ):
        """Log in with username and password and receive a bearer token."""
        result = await auth_service.login(body.username, body.password)
        await open_session(response, session_module, result.user)
        return LoginResponse(token=result.token)

    @router.get("/facebook/token", response_model=LoginResponse)
    async def facebook_login(
        request: Request,
        access_token: Optional[str] = Query(None, description="Facebook user access token"),
        auth_service: AuthService = Depends(get_auth_service),
    ):
        """
        Log in with a Facebook access token.

        The token may be sent as the ``access_token`` query parameter or
        header. A local user is created on first login.
        """
        token = access_token or request.headers.get("access_token")
        result = await auth_service.login_facebook(token)
        return LoginResponse(token=result.token)

    @router.get("/logout")
    async def logout(
        request: Request,
        session_module: SessionModule = Depends(get_session_module),
    ):
        """
        End the login session and redirect to the root page.

        Bearer tokens stay valid until they expire.
        """
        session_id = request.cookies.get(cookie_name)
        if not session_id or not await session_module.end_session(session_id):
            raise NotLoggedIn()

        response = RedirectResponse(url="/", status_code=302)
        response.delete_cookie(cookie_name)
        return response

    return router
