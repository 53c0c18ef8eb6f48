"""
Game repository for database access.

Encapsulates all Supabase queries and data mapping for the ``games`` table,
including the catalog search driven by ``CatalogQueryBuilder``.
"""

from datetime import datetime, timezone
from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.exceptions import DuplicateRecordError
from shared.repository import BaseRepository, constraint_name, is_unique_violation
from .models import Game, GameQuery
from .query import CatalogQueryBuilder


# Fields only the Rating Aggregator may write
AGGREGATE_FIELDS = ("average_rating", "total_reviews")


class GameRepository(BaseRepository[Game]):
    """
    Repository for catalog data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying roles.
    """

    TABLE = "games"

    # -------------------------------------------------------------------------
    # Single game operations
    # -------------------------------------------------------------------------

    async def get_by_id(self, game_id: str) -> Optional[Game]:
        result = await self._db.table(self.TABLE).select("*").eq("id", game_id).execute()
        if not result.data:
            return None
        return self._map_to_game(result.data[0])

    async def exists(self, game_id: str) -> bool:
        result = await self._db.table(self.TABLE).select("id").eq("id", game_id).execute()
        return bool(result.data)

    async def create(self, data: dict[str, Any]) -> Game:
        """
        Insert a game with zeroed rating aggregates.

        Raises:
            DuplicateRecordError: If ``external_id`` is already used
        """
        data = {**data, "average_rating": 0, "total_reviews": 0}
        try:
            result = await self._db.table(self.TABLE).insert(self._serialize(data)).execute()
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateRecordError(self.TABLE, constraint_name(exc)) from exc
            raise
        return self._map_to_game(result.data[0])

    async def update(self, game_id: str, data: dict[str, Any]) -> Optional[Game]:
        """Update editable catalog fields; aggregate fields are dropped."""
        data = {key: value for key, value in data.items() if key not in AGGREGATE_FIELDS}
        data["updated_at"] = datetime.now(timezone.utc).isoformat()
        result = await (
            self._db.table(self.TABLE).update(self._serialize(data)).eq("id", game_id).execute()
        )
        if not result.data:
            return None
        return self._map_to_game(result.data[0])

    async def delete(self, game_id: str) -> bool:
        """
        Delete a game.

        Note: reviews and favorites of the game are deleted via CASCADE.
        """
        result = await self._db.table(self.TABLE).delete().eq("id", game_id).execute()
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Rating aggregates
    # -------------------------------------------------------------------------

    async def update_rating(self, game_id: str, average_rating: float, total_reviews: int) -> bool:
        """Write a recomputed aggregate. Returns False if the game is gone."""
        result = await (
            self._db.table(self.TABLE)
            .update({"average_rating": average_rating, "total_reviews": total_reviews})
            .eq("id", game_id)
            .execute()
        )
        return bool(result.data)

    async def list_rating_snapshots(self) -> list[dict[str, Any]]:
        """``id``, ``average_rating`` and ``total_reviews`` of every game."""
        return await self._fetch_all(
            lambda: self._db.table(self.TABLE)
            .select("id, average_rating, total_reviews")
            .order("id")
        )

    # -------------------------------------------------------------------------
    # Catalog search
    # -------------------------------------------------------------------------

    async def search(self, query: GameQuery) -> tuple[list[Game], int]:
        """
        Run a catalog query.

        The filtered count is read first; a page past the end returns an
        empty list without issuing the page query.

        Returns:
            Tuple of (page of games, total matching count)

        Raises:
            InvalidGameQueryError: If the rating bounds are inverted
        """
        builder = CatalogQueryBuilder(query)
        offset = (query.page - 1) * query.page_size

        count_query = self._db.table(self.TABLE).select("id", count="exact", head=True)
        count_result = await builder.apply_filters(count_query).execute()
        total = count_result.count or 0

        if offset >= total:
            return [], total

        request = builder.apply_filters(self._db.table(self.TABLE).select("*"))
        request = builder.apply_order(request)
        result = await request.range(offset, offset + query.page_size - 1).execute()
        return [self._map_to_game(row) for row in result.data], total

    async def top_rated(self, min_reviews: int, limit: int) -> list[Game]:
        result = await (
            self._db.table(self.TABLE)
            .select("*")
            .gte("total_reviews", min_reviews)
            .order("average_rating", desc=True)
            .order("id")
            .limit(limit)
            .execute()
        )
        return [self._map_to_game(row) for row in result.data]

    async def most_recent(self, limit: int) -> list[Game]:
        result = await (
            self._db.table(self.TABLE)
            .select("*")
            .order("release_date", desc=True, nullsfirst=False)
            .order("id")
            .limit(limit)
            .execute()
        )
        return [self._map_to_game(row) for row in result.data]

    async def list_tag_sources(self) -> list[dict[str, Any]]:
        """Columns the filter metadata and genre statistics are derived from."""
        return await self._fetch_all(
            lambda: self._db.table(self.TABLE)
            .select("id, title, short_description, genre, platform, average_rating")
            .order("id")
        )

    async def count(self) -> int:
        result = await self._db.table(self.TABLE).select("id", count="exact", head=True).execute()
        return result.count or 0

    # -------------------------------------------------------------------------
    # Catalog ingestion
    # -------------------------------------------------------------------------

    async def existing_external_ids(self) -> set[int]:
        rows = await self._fetch_all(
            lambda: self._db.table(self.TABLE)
            .select("external_id")
            .not_.is_("external_id", "null")
            .order("external_id")
        )
        return {int(row["external_id"]) for row in rows}

    async def upsert_by_external_id(self, records: list[dict[str, Any]]) -> int:
        """
        Insert or update catalog records keyed by ``external_id``.

        Rating aggregates are never part of the payload, so existing games
        keep theirs and new games start from the column defaults.
        """
        if not records:
            return 0
        payload = [
            self._serialize({k: v for k, v in record.items() if k not in AGGREGATE_FIELDS})
            for record in records
        ]
        result = await (
            self._db.table(self.TABLE)
            .upsert(payload, on_conflict="external_id")
            .execute()
        )
        return len(result.data or [])

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _serialize(self, data: dict[str, Any]) -> dict[str, Any]:
        """Make dates JSON-safe for the PostgREST payload."""
        release_date = data.get("release_date")
        if release_date is not None and hasattr(release_date, "isoformat"):
            data = {**data, "release_date": release_date.isoformat()}
        return data

    def _map_to_game(self, data: dict[str, Any]) -> Game:
        """Map database row to Game model."""
        return Game(
            id=str(data["id"]),
            external_id=data.get("external_id"),
            title=data["title"],
            thumbnail=data["thumbnail"],
            background_image=data.get("background_image"),
            short_description=data["short_description"],
            game_url=data["game_url"],
            genre=data.get("genre") or [],
            platform=data.get("platform") or [],
            publisher=data.get("publisher") or "",
            developer=data.get("developer") or "",
            release_date=data.get("release_date"),
            average_rating=float(data.get("average_rating") or 0),
            total_reviews=int(data.get("total_reviews") or 0),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
