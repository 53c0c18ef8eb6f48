"""
GameHub API package.

Provides the FastAPI application for the game catalog, review and favorites service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
