"""
API Module - Black Box Interface

Purpose: HTTP routing and module orchestration
Interface: REST API endpoints
Hidden: Request handling, dependency resolution, error responses

The API module only orchestrates - it contains no business logic.
All logic is delegated to appropriate modules.
"""

from .models import (
    Campsite,
    CampsiteCreate,
    CampsiteRef,
    CampsiteUpdate,
    Comment,
    CommentCreate,
    CommentUpdate,
    Favorite,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    User,
)

__all__ = [
    "Campsite",
    "CampsiteCreate",
    "CampsiteRef",
    "CampsiteUpdate",
    "Comment",
    "CommentCreate",
    "CommentUpdate",
    "Favorite",
    "LoginRequest",
    "LoginResponse",
    "SignupRequest",
    "SignupResponse",
    "User",
]
