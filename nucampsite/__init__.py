"""
NuCampsite - Campsite Review Service

A REST backend for campsites, their comments and per-user favorites.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- auth: Token issuance, local and Facebook login, authorization rules
- users: Credential store for user documents
- session: Server-side login sessions
- campsites: Campsite documents with nested comments
- favorites: Per-user favorite campsite lists
- storage: Data persistence abstraction
- api: REST API interface
"""

__version__ = "1.0.0"
