"""
Games module.

Handles the game catalog: search and filtering, admin management and
ingestion from the external catalog source.

Public API:
- IGameService: Interface for catalog operations
- CatalogQueryBuilder: Turns a GameQuery into datastore filters
- CatalogSyncService: Upserts the external catalog
- Game: A catalog entry
- GameQuery: Validated catalog query
"""

from .interfaces import IGameService
from .models import (
    Game,
    GameCreate,
    GameUpdate,
    GameQuery,
    SortOption,
    AppliedFilters,
    GameListResponse,
    FilterMetadata,
    GameStats,
    SyncResult,
)
from .query import CatalogQueryBuilder
from .sync import CatalogSyncService
from .exceptions import (
    GameNotFoundError,
    InvalidGameQueryError,
    DuplicateGameError,
    CatalogSourceError,
)

__all__ = [
    # Interface
    "IGameService",
    # Query engine and ingestion
    "CatalogQueryBuilder",
    "CatalogSyncService",
    # Models
    "Game",
    "GameCreate",
    "GameUpdate",
    "GameQuery",
    "SortOption",
    "AppliedFilters",
    "GameListResponse",
    "FilterMetadata",
    "GameStats",
    "SyncResult",
    # Exceptions
    "GameNotFoundError",
    "InvalidGameQueryError",
    "DuplicateGameError",
    "CatalogSourceError",
]
