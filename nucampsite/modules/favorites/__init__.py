"""
Favorites Module - Black Box Interface

Purpose: Track each user's favorite campsites
Interface: get_favorite(), add_campsites(), remove_campsite(), delete_favorite()
Hidden: Document layout, de-duplication

Replaceable with any document database.
"""

from .favorites import FavoriteModule

__all__ = ["FavoriteModule"]
