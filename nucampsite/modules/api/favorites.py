"""
Favorite campsite endpoints. Every route requires authentication.
"""

from typing import Dict, List

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ..campsites import CampsiteModule
from ..favorites import FavoriteModule
from ..users import UserStore
from .dependencies import (
    get_campsite_module,
    get_favorite_module,
    get_user_store,
    not_supported,
    verify_user,
)
from .models import CampsiteRef, Favorite, User

NO_FAVORITES = "You do not have any favorites to delete."
ALREADY_FAVORITE = "That campsite is already a favorite!"


async def populate_favorite(favorite: Favorite, user_store: UserStore, campsites: CampsiteModule) -> Dict:
    """Favorite document with ``user`` and ``campsites`` replaced by their documents."""
    doc = favorite.to_document()
    user = await user_store.find_by_id(favorite.user)
    doc["user"] = user.public() if user else None

    populated = []
    for campsite_id in favorite.campsites:
        campsite = await campsites.get_campsite(campsite_id)
        # Deleted campsites drop out of the list
        if campsite is not None:
            populated.append(campsite.to_document())
    doc["campsites"] = populated
    return doc


def create_favorites_router() -> APIRouter:
    """
    Create the /favorites router.

    Returns:
        FastAPI router with favorite endpoints
    """
    router = APIRouter(prefix="/favorites", tags=["favorites"])

    @router.get("")
    async def get_favorites(
        user: User = Depends(verify_user),
        favorites: FavoriteModule = Depends(get_favorite_module),
        user_store: UserStore = Depends(get_user_store),
        campsites: CampsiteModule = Depends(get_campsite_module),
    ) -> List[Dict]:
        favorite = await favorites.get_favorite(user.id)
        if favorite is None:
            return []
        return [await populate_favorite(favorite, user_store, campsites)]

    @router.post("")
    async def add_favorites(
        body: List[CampsiteRef],
        user: User = Depends(verify_user),
        favorites: FavoriteModule = Depends(get_favorite_module),
    ) -> Dict:
        favorite = await favorites.add_campsites(user.id, [ref.id for ref in body])
        return favorite.to_document()

    @router.put("")
    async def update_favorites(user: User = Depends(verify_user)):
        return not_supported("PUT", "/favorites")

    @router.delete("")
    async def delete_favorites(
        user: User = Depends(verify_user),
        favorites: FavoriteModule = Depends(get_favorite_module),
    ):
        favorite = await favorites.delete_favorite(user.id)
        if favorite is None:
            return PlainTextResponse(NO_FAVORITES, status_code=404)
        return favorite.to_document()

    @router.get("/{campsite_id}")
    async def get_favorite(campsite_id: str, user: User = Depends(verify_user)):
        return not_supported("GET", f"/favorites/{campsite_id}")

    @router.post("/{campsite_id}")
    async def add_favorite(
        campsite_id: str,
        user: User = Depends(verify_user),
        favorites: FavoriteModule = Depends(get_favorite_module),
    ):
        favorite = await favorites.get_favorite(user.id)
        if favorite is not None and campsite_id in favorite.campsites:
            return PlainTextResponse(ALREADY_FAVORITE, status_code=200)

        favorite = await favorites.add_campsites(user.id, [campsite_id])
        return favorite.to_document()

    @router.put("/{campsite_id}")
    async def update_favorite(campsite_id: str, user: User = Depends(verify_user)):
        return not_supported("PUT", f"/favorites/{campsite_id}")

    @router.delete("/{campsite_id}")
    async def delete_favorite(
        campsite_id: str,
        user: User = Depends(verify_user),
        favorites: FavoriteModule = Depends(get_favorite_module),
    ):
        favorite = await favorites.remove_campsite(user.id, campsite_id)
        if favorite is None:
            return PlainTextResponse(NO_FAVORITES, status_code=404)
        return favorite.to_document()

    return router
