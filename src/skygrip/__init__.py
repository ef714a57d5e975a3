"""Skygrip - typed entity storage and full-text search on Redis."""

__version__ = "1.0.0"
