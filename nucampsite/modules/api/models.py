"""
NuCampsite shared data models.

These models define the structure of all documents and request/response
bodies passed between components. Stored documents use the wire field
names (``_id``, ``facebookId``, ``createdAt``); Python code uses the
snake_case attribute names.
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..storage.documents import utcnow


def new_id() -> str:
    """Generate a document id."""
    return str(uuid.uuid4())


class Document(BaseModel):
    """Base for stored documents."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id, alias="_id")
    created_at: str = Field(default_factory=utcnow, alias="createdAt")
    updated_at: str = Field(default_factory=utcnow, alias="updatedAt")

    def to_document(self) -> dict:
        """Serialize for storage and responses."""
        return self.model_dump(by_alias=True)

    def touched(self, **changes):
        """Return a copy with ``changes`` applied and updatedAt refreshed."""
        changes["updated_at"] = utcnow()
        return self.model_copy(update=changes)


# Stored documents


class User(Document):
    """User identity record. ``hash`` embeds its own salt."""

    username: str
    hash: Optional[str] = None
    facebook_id: Optional[str] = Field(None, alias="facebookId")
    firstname: str = ""
    lastname: str = ""
    admin: bool = False

    def public(self) -> dict:
        """User document safe to send to clients."""
        return self.model_dump(by_alias=True, exclude={"hash"})


class Comment(Document):
    """Comment subdocument embedded in a campsite."""

    rating: int = Field(..., ge=1, le=5)
    text: str
    author: str


class Campsite(Document):
    """Campsite aggregate, owning its comments."""

    name: str
    description: str
    image: str
    elevation: int
    cost: float = Field(..., ge=0)
    featured: bool = False
    comments: List[Comment] = Field(default_factory=list)

    def find_comment(self, comment_id: str) -> Optional[Comment]:
        for comment in self.comments:
            if comment.id == comment_id:
                return comment
        return None


class Favorite(Document):
    """Favorite campsites of one user."""

    user: str
    campsites: List[str] = Field(default_factory=list)


# Request Models (API Input)


class SignupRequest(BaseModel):
    """Local registration request."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    firstname: Optional[str] = None
    lastname: Optional[str] = None


class LoginRequest(BaseModel):
    """Local login request."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class CampsiteCreate(BaseModel):
    """Request to create a campsite."""

    name: str = Field(..., min_length=1)
    description: str
    image: str
    elevation: int
    cost: float = Field(..., ge=0)
    featured: bool = False


class CampsiteUpdate(BaseModel):
    """Partial campsite update; only fields sent are applied."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    elevation: Optional[int] = None
    cost: Optional[float] = Field(None, ge=0)
    featured: Optional[bool] = None


class CommentCreate(BaseModel):
    """Request to add a comment. The author is always the acting user."""

    rating: int = Field(..., ge=1, le=5)
    text: str = Field(..., min_length=1)


class CommentUpdate(BaseModel):
    """Comment edit; empty fields are left untouched."""

    rating: Optional[int] = Field(None, ge=1, le=5)
    text: Optional[str] = None


class CampsiteRef(BaseModel):
    """Reference to a campsite in a favorites request body."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")


# Response Models (API Output)


class SignupResponse(BaseModel):
    success: bool = True
    status: str = "Registration Successful!"


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    status: str = "You are successfully logged in!"
