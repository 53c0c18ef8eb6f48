"""
Games module interface.

Other modules should depend on IGameService, not the concrete implementation.
"""

from typing import Protocol, runtime_checkable

from .models import (
    FilterMetadata,
    Game,
    GameCreate,
    GameListResponse,
    GameQuery,
    GameStats,
    GameUpdate,
)


@runtime_checkable
class IGameService(Protocol):
    """
    Interface for catalog operations.
    """

    async def list_games(self, query: GameQuery) -> GameListResponse:
        """
        Run a catalog query.

        Args:
            query: Validated filters, sort and pagination

        Returns:
            The requested page, pagination metadata and the applied filters

        Raises:
            InvalidGameQueryError: If min_rating is greater than max_rating
        """
        ...

    async def get_game(self, game_id: str) -> Game:
        """
        Get a game by ID.

        Raises:
            GameNotFoundError: If the game does not exist
        """
        ...

    async def get_filter_metadata(self) -> FilterMetadata:
        """Genres, platforms, popular tags and sort options of the catalog."""
        ...

    async def get_stats(self) -> GameStats:
        """Catalog-wide totals and highlights."""
        ...

    async def create_game(self, data: GameCreate) -> Game:
        """
        Add a game with zeroed rating aggregates.

        Raises:
            DuplicateGameError: If the external ID is already in the catalog
        """
        ...

    async def update_game(self, game_id: str, data: GameUpdate) -> Game:
        """
        Edit catalog fields of a game.

        Raises:
            GameNotFoundError: If the game does not exist
        """
        ...

    async def delete_game(self, game_id: str) -> None:
        """
        Delete a game with its reviews and favorites.

        Raises:
            GameNotFoundError: If the game does not exist
        """
        ...
