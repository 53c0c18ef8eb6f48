"""
Review repository for database access.

Writes go to the ``reviews`` table; reads come from the ``review_details``
view so every review carries its author and game summary.
"""

from datetime import datetime, timezone
from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.exceptions import DuplicateRecordError
from shared.repository import BaseRepository, constraint_name, is_unique_violation
from .models import Review


class ReviewRepository(BaseRepository[Review]):
    """
    Repository for review data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying ownership.
    """

    TABLE = "reviews"
    VIEW = "review_details"

    # -------------------------------------------------------------------------
    # Single review operations
    # -------------------------------------------------------------------------

    async def get_by_id(self, review_id: str) -> Optional[Review]:
        result = await self._db.table(self.VIEW).select("*").eq("id", review_id).execute()
        if not result.data:
            return None
        return self._map_to_review(result.data[0])

    async def get_for_pair(self, user_id: str, game_id: str) -> Optional[Review]:
        """Get the single review an identity wrote for a game, if any."""
        result = await (
            self._db.table(self.VIEW)
            .select("*")
            .eq("user_id", user_id)
            .eq("game_id", game_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_review(result.data[0])

    async def create(self, user_id: str, game_id: str, rating: int, content: str) -> Review:
        """
        Insert a review.

        Raises:
            DuplicateRecordError: If the identity already reviewed the game
        """
        data = {
            "user_id": user_id,
            "game_id": game_id,
            "rating": rating,
            "content": content,
        }
        try:
            result = await self._db.table(self.TABLE).insert(data).execute()
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateRecordError(self.TABLE, constraint_name(exc)) from exc
            raise
        return self._map_to_review(result.data[0])

    async def update(self, review_id: str, rating: int, content: str) -> Optional[Review]:
        data = {
            "rating": rating,
            "content": content,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        result = await self._db.table(self.TABLE).update(data).eq("id", review_id).execute()
        if not result.data:
            return None
        return self._map_to_review(result.data[0])

    async def delete(self, review_id: str) -> bool:
        result = await self._db.table(self.TABLE).delete().eq("id", review_id).execute()
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    async def list_for_game(self, game_id: str) -> list[Review]:
        """All reviews of a game, newest first."""
        rows = await self._fetch_all(
            lambda: self._db.table(self.VIEW)
            .select("*")
            .eq("game_id", game_id)
            .order("created_at", desc=True)
            .order("id")
        )
        return [self._map_to_review(row) for row in rows]

    async def list_for_user(
        self,
        user_id: str,
        page: int,
        page_size: int,
    ) -> tuple[list[Review], int]:
        """A page of one identity's reviews, newest first."""
        return await self._list_page(page, page_size, user_id=user_id)

    async def list_all(
        self,
        page: int,
        page_size: int,
        game_id: Optional[str] = None,
    ) -> tuple[list[Review], int]:
        """A page of every review, newest first (moderation view)."""
        return await self._list_page(page, page_size, game_id=game_id)

    # -------------------------------------------------------------------------
    # Aggregation support
    # -------------------------------------------------------------------------

    async def get_ratings(self, game_id: str) -> list[int]:
        """Every star rating currently stored for a game."""
        rows = await self._fetch_all(
            lambda: self._db.table(self.TABLE)
            .select("id, rating")
            .eq("game_id", game_id)
            .order("id")
        )
        return [int(row["rating"]) for row in rows]

    async def game_ids_for_user(self, user_id: str) -> list[str]:
        """Distinct IDs of the games an identity has reviewed."""
        rows = await self._fetch_all(
            lambda: self._db.table(self.TABLE)
            .select("game_id")
            .eq("user_id", user_id)
            .order("game_id")
        )
        return list(dict.fromkeys(str(row["game_id"]) for row in rows))

    async def count(self) -> int:
        result = await self._db.table(self.TABLE).select("id", count="exact", head=True).execute()
        return result.count or 0

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    async def _list_page(
        self,
        page: int,
        page_size: int,
        user_id: Optional[str] = None,
        game_id: Optional[str] = None,
    ) -> tuple[list[Review], int]:
        offset = (page - 1) * page_size

        count_query = self._db.table(self.TABLE).select("id", count="exact", head=True)
        count_query = self._apply_filters(count_query, user_id, game_id)
        count_result = await count_query.execute()
        total = count_result.count or 0

        if offset >= total:
            return [], total

        query = self._db.table(self.VIEW).select("*")
        query = self._apply_filters(query, user_id, game_id)
        result = await (
            query.order("created_at", desc=True)
            .order("id")
            .range(offset, offset + page_size - 1)
            .execute()
        )
        return [self._map_to_review(row) for row in result.data], total

    def _apply_filters(self, query, user_id: Optional[str], game_id: Optional[str]):
        if user_id:
            query = query.eq("user_id", user_id)
        if game_id:
            query = query.eq("game_id", game_id)
        return query

    def _map_to_review(self, data: dict[str, Any]) -> Review:
        """Map a reviews row or review_details row to Review."""
        return Review(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            game_id=str(data["game_id"]),
            rating=int(data["rating"]),
            content=data["content"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
            author_name=data.get("author_name"),
            author_username=data.get("author_username"),
            author_avatar_url=data.get("author_avatar_url"),
            game_title=data.get("game_title"),
            game_thumbnail=data.get("game_thumbnail"),
        )
