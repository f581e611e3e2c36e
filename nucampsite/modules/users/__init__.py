"""
Users Module - Black Box Interface

Purpose: Persist user identity records
Interface: find_by_id(), find_by_username(), find_by_facebook_id(), create(), save()
Hidden: Document layout, identity indexes, uniqueness enforcement

Replaceable with any credential store (database, directory service).
"""

from .store import UserStore

__all__ = ["UserStore"]
