"""
Campsite and comment endpoints.
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends

from ...errors import NotFound
from ..auth import authorize_comment_delete, authorize_comment_edit
from ..campsites import CampsiteModule
from ..users import UserStore
from .dependencies import (
    get_campsite_module,
    get_user_store,
    not_supported,
    verify_admin,
    verify_user,
)
from .models import Campsite, CampsiteCreate, CampsiteUpdate, CommentCreate, CommentUpdate, User

logger = logging.getLogger(__name__)


async def populate_authors(campsite: Campsite, user_store: UserStore) -> Dict:
    """Campsite document with each comment's author replaced by the public user."""
    doc = campsite.to_document()
    authors: Dict[str, Optional[Dict]] = {}
    for comment in doc["comments"]:
        author_id = comment["author"]
        if author_id not in authors:
            author = await user_store.find_by_id(author_id)
            authors[author_id] = author.public() if author else None
        comment["author"] = authors[author_id]
    return doc


def create_campsites_router() -> APIRouter:
    """
    Create the /campsites router.

    Returns:
        FastAPI router with campsite and comment endpoints
    """
    router = APIRouter(prefix="/campsites", tags=["campsites"])

    async def load_campsite(campsites: CampsiteModule, campsite_id: str) -> Campsite:
        campsite = await campsites.get_campsite(campsite_id)
        if campsite is None:
            raise NotFound(f"Campsite {campsite_id} not found")
        return campsite

    # /campsites

    @router.get("")
    async def list_campsites(
        campsites: CampsiteModule = Depends(get_campsite_module),
        user_store: UserStore = Depends(get_user_store),
    ) -> List[Dict]:
        return [await populate_authors(c, user_store) for c in await campsites.list_campsites()]

    @router.post("")
    async def create_campsite(
        body: CampsiteCreate,
        admin: User = Depends(verify_admin),
        campsites: CampsiteModule = Depends(get_campsite_module),
    ) -> Dict:
        campsite = await campsites.create_campsite(body)
        return campsite.to_document()

    @router.put("")
    async def update_campsites(user: User = Depends(verify_user)):
        return not_supported("PUT", "/campsites")

    @router.delete("")
    async def delete_campsites(
        admin: User = Depends(verify_admin),
        campsites: CampsiteModule = Depends(get_campsite_module),
    ) -> Dict:
        deleted = await campsites.delete_all()
        return {"acknowledged": True, "deletedCount": deleted}

    # /campsites/{campsite_id}

    @router.get("/{campsite_id}")
    async def get_campsite(
        campsite_id: str,
        campsites: CampsiteModule = Depends(get_campsite_module),
        user_store: UserStore = Depends(get_user_store),
    ) -> Dict:
        campsite = await load_campsite(campsites, campsite_id)
        return await populate_authors(campsite, user_store)

    @router.post("/{campsite_id}")
    async def post_campsite(campsite_id: str, user: User = Depends(verify_user)):
        return not_supported("POST", f"/campsites/{campsite_id}")

    @router.put("/{campsite_id}")
    async def update_campsite(
        campsite_id: str,
        body: CampsiteUpdate,
        admin: User = Depends(verify_admin),
        campsites: CampsiteModule = Depends(get_campsite_module),
    ) -> Dict:
        changes = body.model_dump(exclude_unset=True, exclude_none=True)
        campsite = await campsites.update_campsite(campsite_id, changes)
        if campsite is None:
            raise NotFound(f"Campsite {campsite_id} not found")
        return campsite.to_document()

    @router.delete("/{campsite_id}")
    async def delete_campsite(
        campsite_id: str,
        admin: User = Depends(verify_admin),
        campsites: CampsiteModule = Depends(get_campsite_module),
    ) -> Optional[Dict]:
        campsite = await campsites.delete_campsite(campsite_id)
        return campsite.to_document() if campsite else None

    # /campsites/{campsite_id}/comments

    @router.get("/{campsite_id}/comments")
    async def list_comments(
        campsite_id: str,
        campsites: CampsiteModule = Depends(get_campsite_module),
        user_store: UserStore = Depends(get_user_store),
    ) -> List[Dict]:
        campsite = await load_campsite(campsites, campsite_id)
        doc = await populate_authors(campsite, user_store)
        return doc["comments"]

    @router.post("/{campsite_id}/comments")
    async def add_comment(
        campsite_id: str,
        body: CommentCreate,
        user: User = Depends(verify_user),
        campsites: CampsiteModule = Depends(get_campsite_module),
    ) -> Dict:
        campsite = await load_campsite(campsites, campsite_id)
        updated = await campsites.add_comment(campsite, body, author_id=user.id)
        return updated.to_document()

    @router.put("/{campsite_id}/comments")
    async def update_comments(campsite_id: str, user: User = Depends(verify_user)):
        return not_supported("PUT", f"/campsites/{campsite_id}/comments")

    @router.delete("/{campsite_id}/comments")
    async def delete_comments(
        campsite_id: str,
        admin: User = Depends(verify_admin),
        campsites: CampsiteModule = Depends(get_campsite_module),
    ) -> Dict:
        campsite = await load_campsite(campsites, campsite_id)
        updated = await campsites.remove_all_comments(campsite)
        return updated.to_document()

    # /campsites/{campsite_id}/comments/{comment_id}

    @router.get("/{campsite_id}/comments/{comment_id}")
    async def get_comment(
        campsite_id: str,
        comment_id: str,
        campsites: CampsiteModule = Depends(get_campsite_module),
        user_store: UserStore = Depends(get_user_store),
    ) -> Dict:
        campsite = await load_campsite(campsites, campsite_id)
        if campsite.find_comment(comment_id) is None:
            raise NotFound(f"Comment {comment_id} not found")
        doc = await populate_authors(campsite, user_store)
        return next(c for c in doc["comments"] if c["_id"] == comment_id)

    @router.post("/{campsite_id}/comments/{comment_id}")
    async def post_comment(campsite_id: str, comment_id: str, user: User = Depends(verify_user)):
        return not_supported("POST", f"/campsites/{campsite_id}/comments/{comment_id}")

    @router.put("/{campsite_id}/comments/{comment_id}")
    async def update_comment(
        campsite_id: str,
        comment_id: str,
        body: CommentUpdate,
        user: User = Depends(verify_user),
        campsites: CampsiteModule = Depends(get_campsite_module),
    ) -> Dict:
        """Edit a comment. Only its author may do this; being admin is not enough."""
        campsite = await load_campsite(campsites, campsite_id)
        comment = campsite.find_comment(comment_id)
        if comment is None:
            raise NotFound(f"Comment {comment_id} not found")

        authorize_comment_edit(user, comment)
        updated = await campsites.update_comment(campsite, comment_id, rating=body.rating, text=body.text)
        return updated.to_document()

    @router.delete("/{campsite_id}/comments/{comment_id}")
    async def delete_comment(
        campsite_id: str,
        comment_id: str,
        user: User = Depends(verify_user),
        campsites: CampsiteModule = Depends(get_campsite_module),
    ) -> Dict:
        """Delete a comment. Its author or any admin may do this."""
        campsite = await load_campsite(campsites, campsite_id)
        comment = campsite.find_comment(comment_id)
        if comment is None:
            raise NotFound(f"Comment {comment_id} not found")

        authorize_comment_delete(user, comment)
        updated = await campsites.remove_comment(campsite, comment_id)
        logger.info(f"Comment {comment_id} deleted by {user.username}")
        return updated.to_document()

    return router
