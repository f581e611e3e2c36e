"""
Session Module - Black Box Interface

Purpose: Manage server-side login sessions
Interface: create_session(), get_session(), end_session()
Hidden: Session storage, TTL management

Replaceable with any session backend (database, in-memory, signed cookies).
"""

from .session import SessionModule

__all__ = ["SessionModule"]
