"""
Campsites Module - Black Box Interface

Purpose: Store campsites and the comments embedded in them
Interface: list/get/create/update/delete campsites, add/update/remove comments
Hidden: Document layout, aggregate persistence

Replaceable with any document database.
"""

from .campsites import CampsiteModule

__all__ = ["CampsiteModule"]
