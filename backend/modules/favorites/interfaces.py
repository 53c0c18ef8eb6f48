"""
Favorites module interface.

Other modules should depend on IFavoriteService, not the concrete implementation.
"""

from typing import Protocol, runtime_checkable

from .models import Favorite, FavoriteListResponse, FavoriteQuery, FavoriteStatus


@runtime_checkable
class IFavoriteService(Protocol):
    """
    Interface for the favorite relation.
    """

    async def add(self, user_id: str, game_id: str) -> Favorite:
        """
        Bookmark a game.

        Raises:
            GameNotFoundError: If the game does not exist
            FavoriteAlreadyExistsError: If the game is already a favorite
        """
        ...

    async def remove(self, user_id: str, game_id: str) -> None:
        """
        Remove a bookmark.

        Raises:
            FavoriteNotFoundError: If the game is not a favorite
        """
        ...

    async def status(self, user_id: str, game_id: str) -> FavoriteStatus:
        """Whether the game is a favorite, and since when."""
        ...

    async def list_favorites(self, user_id: str, query: FavoriteQuery) -> FavoriteListResponse:
        """Filtered, sorted, paginated favorites with game summaries."""
        ...

    async def favorite_game_ids(self, user_id: str) -> list[str]:
        """IDs of every favorite game, most recently added first."""
        ...
