"""Storefront — catalog, sessions and live chat for a small shop.

Product CRUD with paginated listings, cookie sessions with ADMIN/USER
roles, thumbnail uploads, and a WebSocket channel for chat and
catalog-change notifications.
"""

__version__ = "0.1.0"
