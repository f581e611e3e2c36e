import logging
from typing import Iterable, Optional

from ..api.models import Favorite
from ..storage import DocumentStore

logger = logging.getLogger(__name__)


class FavoriteModule:
    """
    One favorites document per user, stored under the user's id.

    Campsite ids keep insertion order and never repeat.
    """

    def __init__(self, redis_client):
        """
        Initialize favorites module.

        Args:
            redis_client: Async Redis client
        """
        self.documents = DocumentStore(redis_client, "favorite")

    async def get_favorite(self, user_id: str) -> Optional[Favorite]:
        doc = await self.documents.get(user_id)
        if doc is None:
            return None
        return Favorite.model_validate(doc)

    async def add_campsites(self, user_id: str, campsite_ids: Iterable[str]) -> Favorite:
        """
        Add campsites to a user's favorites, creating the document if needed.

        Ids already present are skipped.
        """
        favorite = await self.get_favorite(user_id)
        if favorite is None:
            favorite = Favorite(user=user_id)

        campsites = list(favorite.campsites)
        for campsite_id in campsite_ids:
            if campsite_id not in campsites:
                campsites.append(campsite_id)

        updated = favorite.touched(campsites=campsites)
        await self.documents.put(updated.to_document(), doc_id=user_id)
        return updated

    async def remove_campsite(self, user_id: str, campsite_id: str) -> Optional[Favorite]:
        """
        Remove one campsite from a user's favorites.

        Returns:
            The updated document, or None if the user has no favorites
        """
        favorite = await self.get_favorite(user_id)
        if favorite is None:
            return None

        updated = favorite.touched(campsites=[c for c in favorite.campsites if c != campsite_id])
        await self.documents.put(updated.to_document(), doc_id=user_id)
        return updated

    async def delete_favorite(self, user_id: str) -> Optional[Favorite]:
        """Delete a user's favorites. Returns the deleted document, or None."""
        doc = await self.documents.delete(user_id)
        if doc is None:
            return None
        logger.info(f"Favorites deleted for user {user_id}")
        return Favorite.model_validate(doc)
