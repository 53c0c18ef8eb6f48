"""
Favorites service implementation.
"""

import logging

from shared.exceptions import DuplicateRecordError
from shared.models import PaginationMeta
from modules.games.exceptions import GameNotFoundError
from .exceptions import FavoriteAlreadyExistsError, FavoriteNotFoundError
from .interfaces import IFavoriteService
from .models import Favorite, FavoriteListResponse, FavoriteQuery, FavoriteStatus
from .repository import FavoriteRepository


logger = logging.getLogger(__name__)


class FavoriteService(IFavoriteService):
    """
    Favorite service backed by FavoriteRepository.

    Args:
        repository: Favorite data access
        games: Game repository, used to check a game exists
    """

    def __init__(self, repository: FavoriteRepository, games):
        self._repo = repository
        self._games = games

    async def add(self, user_id: str, game_id: str) -> Favorite:
        if not await self._games.exists(game_id):
            raise GameNotFoundError(game_id)
        if await self._repo.get(user_id, game_id) is not None:
            raise FavoriteAlreadyExistsError(user_id, game_id)

        try:
            favorite = await self._repo.create(user_id, game_id)
        except DuplicateRecordError as exc:
            raise FavoriteAlreadyExistsError(user_id, game_id) from exc

        logger.debug(f"User {user_id} added game {game_id} to favorites")
        return await self._repo.get_with_game(favorite.id) or favorite

    async def remove(self, user_id: str, game_id: str) -> None:
        if not await self._repo.delete(user_id, game_id):
            raise FavoriteNotFoundError(user_id, game_id)

    async def status(self, user_id: str, game_id: str) -> FavoriteStatus:
        favorite = await self._repo.get(user_id, game_id)
        if favorite is None:
            return FavoriteStatus(is_favorite=False)
        return FavoriteStatus(
            is_favorite=True,
            favorite_id=favorite.id,
            added_at=favorite.added_at,
        )

    async def list_favorites(self, user_id: str, query: FavoriteQuery) -> FavoriteListResponse:
        favorites, total = await self._repo.list_for_user(user_id, query)
        return FavoriteListResponse(
            favorites=favorites,
            pagination=PaginationMeta.build(query.page, query.page_size, total),
        )

    async def favorite_game_ids(self, user_id: str) -> list[str]:
        return await self._repo.game_ids_for_user(user_id)
