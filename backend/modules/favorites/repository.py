"""
Favorite repository for database access.

Writes go to the ``favorites`` table; listings read the ``favorite_details``
view so they can filter and sort on game columns.
"""

from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.exceptions import DuplicateRecordError
from shared.repository import (
    BaseRepository,
    constraint_name,
    contains_pattern,
    ilike_conditions,
    is_unique_violation,
)
from .models import Favorite, FavoriteGame, FavoriteQuery, FavoriteSort


# (column, descending) pairs; every ordering ends with the id tie-break
FAVORITE_SORT_ORDERS: dict[FavoriteSort, list[tuple[str, bool]]] = {
    FavoriteSort.ADDED_AT: [("added_at", True)],
    FavoriteSort.TITLE: [("title", False)],
    FavoriteSort.RATING: [("average_rating", True)],
    FavoriteSort.RELEASE_DATE: [("release_date", True)],
}


class FavoriteRepository(BaseRepository[Favorite]):
    """
    Repository for favorite data access.

    Note: This repository does NOT perform authorization checks.
    Every method is scoped to a user ID supplied by the service layer.
    """

    TABLE = "favorites"
    VIEW = "favorite_details"

    async def get(self, user_id: str, game_id: str) -> Optional[Favorite]:
        result = await (
            self._db.table(self.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("game_id", game_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_favorite(result.data[0])

    async def get_with_game(self, favorite_id: str) -> Optional[Favorite]:
        result = await self._db.table(self.VIEW).select("*").eq("id", favorite_id).execute()
        if not result.data:
            return None
        return self._map_to_favorite(result.data[0])

    async def create(self, user_id: str, game_id: str) -> Favorite:
        """
        Insert a favorite.

        Raises:
            DuplicateRecordError: If the game is already a favorite
        """
        try:
            result = await (
                self._db.table(self.TABLE)
                .insert({"user_id": user_id, "game_id": game_id})
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateRecordError(self.TABLE, constraint_name(exc)) from exc
            raise
        return self._map_to_favorite(result.data[0])

    async def delete(self, user_id: str, game_id: str) -> bool:
        result = await (
            self._db.table(self.TABLE)
            .delete()
            .eq("user_id", user_id)
            .eq("game_id", game_id)
            .execute()
        )
        return bool(result.data)

    async def list_for_user(
        self,
        user_id: str,
        query: FavoriteQuery,
    ) -> tuple[list[Favorite], int]:
        """
        A filtered, sorted page of one identity's favorites.

        Returns:
            Tuple of (page of favorites with game summaries, total matching count)
        """
        offset = (query.page - 1) * query.page_size

        count_query = self._db.table(self.VIEW).select("id", count="exact", head=True)
        count_result = await self._apply_filters(count_query, user_id, query).execute()
        total = count_result.count or 0

        if offset >= total:
            return [], total

        request = self._apply_filters(self._db.table(self.VIEW).select("*"), user_id, query)
        for column, descending in FAVORITE_SORT_ORDERS[query.sort_by] + [("id", False)]:
            if descending:
                request = request.order(column, desc=True, nullsfirst=False)
            else:
                request = request.order(column)
        result = await request.range(offset, offset + query.page_size - 1).execute()
        return [self._map_to_favorite(row) for row in result.data], total

    async def game_ids_for_user(self, user_id: str) -> list[str]:
        rows = await self._fetch_all(
            lambda: self._db.table(self.TABLE)
            .select("game_id, added_at")
            .eq("user_id", user_id)
            .order("added_at", desc=True)
            .order("game_id")
        )
        return [str(row["game_id"]) for row in rows]

    async def count(self) -> int:
        result = await self._db.table(self.TABLE).select("id", count="exact", head=True).execute()
        return result.count or 0

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _apply_filters(self, request, user_id: str, query: FavoriteQuery):
        request = request.eq("user_id", user_id)
        if query.genre:
            request = request.ilike("genre_text", contains_pattern(query.genre))
        if query.platform:
            request = request.ilike("platform_text", contains_pattern(query.platform))
        if query.search:
            request = request.or_(ilike_conditions(["title", "short_description"], query.search))
        return request

    def _map_to_favorite(self, data: dict[str, Any]) -> Favorite:
        """Map a favorites row or favorite_details row to Favorite."""
        game = None
        if data.get("title") is not None:
            game = FavoriteGame(
                id=str(data["game_id"]),
                title=data["title"],
                thumbnail=data.get("thumbnail") or "",
                short_description=data.get("short_description") or "",
                genre=data.get("genre") or [],
                platform=data.get("platform") or [],
                release_date=data.get("release_date"),
                average_rating=float(data.get("average_rating") or 0),
                total_reviews=int(data.get("total_reviews") or 0),
            )
        return Favorite(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            game_id=str(data["game_id"]),
            added_at=data["added_at"],
            game=game,
        )
