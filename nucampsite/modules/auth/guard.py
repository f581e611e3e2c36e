"""
Authorization rules for an authenticated user.

Each check returns None when the operation may proceed and raises
Forbidden otherwise.

Comment edit and delete differ: editing is reserved
to the comment's author, while deleting is also open to admins.
"""

import logging
from typing import Optional

from ...errors import Forbidden
from ..api.models import Comment, User

logger = logging.getLogger(__name__)


def require_admin(user: User) -> None:
    """Allow only admins."""
    if not user.admin:
        logger.info(f"User {user.username} denied admin operation")
        raise Forbidden()


def require_owner(acting_user: User, resource_owner_id: str, message: Optional[str] = None) -> None:
    """Allow only the owner of a resource."""
    if acting_user.id != resource_owner_id:
        logger.info(f"User {acting_user.username} is not the owner of the resource")
        raise Forbidden(message)


def require_owner_or_admin(acting_user: User, resource_owner_id: str, message: Optional[str] = None) -> None:
    """Allow the owner of a resource, or any admin."""
    if acting_user.id != resource_owner_id and not acting_user.admin:
        logger.info(f"User {acting_user.username} is neither owner nor admin")
        raise Forbidden(message)


def authorize_comment_edit(acting_user: User, comment: Comment) -> None:
    # No admin override for edits
    require_owner(acting_user, comment.author, "You are not authorized to update this comment!")


def authorize_comment_delete(acting_user: User, comment: Comment) -> None:
    require_owner_or_admin(acting_user, comment.author, "You are not authorized to delete this comment!")
