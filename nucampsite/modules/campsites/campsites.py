import logging
from typing import List, Optional

from ..api.models import Campsite, CampsiteCreate, Comment, CommentCreate
from ..storage import DocumentStore

logger = logging.getLogger(__name__)


class CampsiteModule:
    """
    Campsite documents and their embedded comments.

    Every change loads the campsite aggregate, builds an updated copy and
    persists it in one write. Nothing is written implicitly.
    """

    def __init__(self, redis_client):
        """
        Initialize campsite module.

        Args:
            redis_client: Async Redis client
        """
        self.documents = DocumentStore(redis_client, "campsite")

    async def list_campsites(self) -> List[Campsite]:
        return [Campsite.model_validate(doc) for doc in await self.documents.all()]

    async def get_campsite(self, campsite_id: str) -> Optional[Campsite]:
        doc = await self.documents.get(campsite_id)
        if doc is None:
            return None
        return Campsite.model_validate(doc)

    async def create_campsite(self, data: CampsiteCreate) -> Campsite:
        campsite = Campsite(**data.model_dump())
        await self.documents.put(campsite.to_document())
        logger.info(f"Campsite created: {campsite.name} ({campsite.id})")
        return campsite

    async def update_campsite(self, campsite_id: str, changes: dict) -> Optional[Campsite]:
        """
        Apply a partial update.

        Args:
            campsite_id: Campsite to update
            changes: Field values to set (snake_case attribute names)

        Returns:
            The updated campsite, or None if it does not exist
        """
        campsite = await self.get_campsite(campsite_id)
        if campsite is None:
            return None

        updated = campsite.touched(**changes)
        await self.documents.put(updated.to_document())
        return updated

    async def delete_campsite(self, campsite_id: str) -> Optional[Campsite]:
        """Delete a campsite. Returns the deleted campsite, or None."""
        doc = await self.documents.delete(campsite_id)
        if doc is None:
            return None
        logger.info(f"Campsite deleted: {campsite_id}")
        return Campsite.model_validate(doc)

    async def delete_all(self) -> int:
        """Delete every campsite. Returns how many were deleted."""
        deleted = await self.documents.clear()
        logger.info(f"Deleted {deleted} campsites")
        return deleted

    # Comments

    async def add_comment(self, campsite: Campsite, data: CommentCreate, author_id: str) -> Campsite:
        """Append a comment authored by ``author_id``."""
        comment = Comment(rating=data.rating, text=data.text, author=author_id)
        updated = campsite.touched(comments=[*campsite.comments, comment])
        await self.documents.put(updated.to_document())
        return updated

    async def update_comment(
        self,
        campsite: Campsite,
        comment_id: str,
        rating: Optional[int] = None,
        text: Optional[str] = None,
    ) -> Campsite:
        """
        Edit a comment's rating and/or text.

        Empty values leave the field unchanged. The caller is responsible
        for checking the comment exists and may be edited.
        """
        changes = {}
        if rating:
            changes["rating"] = rating
        if text:
            changes["text"] = text

        comments = [
            comment.touched(**changes) if comment.id == comment_id else comment
            for comment in campsite.comments
        ]
        updated = campsite.touched(comments=comments)
        await self.documents.put(updated.to_document())
        return updated

    async def remove_comment(self, campsite: Campsite, comment_id: str) -> Campsite:
        """Remove one comment."""
        comments = [comment for comment in campsite.comments if comment.id != comment_id]
        updated = campsite.touched(comments=comments)
        await self.documents.put(updated.to_document())
        return updated

    async def remove_all_comments(self, campsite: Campsite) -> Campsite:
        """Remove every comment of a campsite."""
        updated = campsite.touched(comments=[])
        await self.documents.put(updated.to_document())
        return updated
