"""
Favorites module.

Handles per-user game bookmarks.

Public API:
- IFavoriteService: Interface for favorite operations
- Favorite: A bookmark, with a game summary on reads
- FavoriteQuery: Filters, sort and pagination for listings
"""

from .interfaces import IFavoriteService
from .models import (
    Favorite,
    FavoriteGame,
    FavoriteQuery,
    FavoriteSort,
    FavoriteStatus,
    FavoriteListResponse,
    FavoriteIdsResponse,
)
from .exceptions import FavoriteAlreadyExistsError, FavoriteNotFoundError

__all__ = [
    # Interface
    "IFavoriteService",
    # Models
    "Favorite",
    "FavoriteGame",
    "FavoriteQuery",
    "FavoriteSort",
    "FavoriteStatus",
    "FavoriteListResponse",
    "FavoriteIdsResponse",
    # Exceptions
    "FavoriteAlreadyExistsError",
    "FavoriteNotFoundError",
]
