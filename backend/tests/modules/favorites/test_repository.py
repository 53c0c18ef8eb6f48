"""Tests for the favorite repository."""

import pytest
from datetime import datetime, timezone

from postgrest.exceptions import APIError

from shared.exceptions import DuplicateRecordError
from modules.favorites.models import FavoriteQuery
from modules.favorites.repository import FavoriteRepository

from tests.fakes import FakeResponse, RecordingClient


def create_mock_favorite_data(
    favorite_id: str = "fav-123",
    user_id: str = "user-123",
    game_id: str = "game-123",
    title: str = "Battle Arena",
) -> dict:
    """Helper to create mock favorite_details rows."""
    return {
        "id": favorite_id,
        "user_id": user_id,
        "game_id": game_id,
        "added_at": datetime.now(timezone.utc).isoformat(),
        "title": title,
        "thumbnail": "https://img.example.com/540.jpg",
        "short_description": "A free-to-play arena shooter",
        "genre": ["Shooter"],
        "platform": ["PC (Windows)"],
        "release_date": "2021-05-04",
        "average_rating": 4.5,
        "total_reviews": 2,
    }


class TestListForUser:
    @pytest.mark.asyncio
    async def test_filters_apply_to_count_and_page(self):
        db = RecordingClient(
            FakeResponse(count=12),
            FakeResponse([create_mock_favorite_data()]),
        )
        repo = FavoriteRepository(db)

        favorites, total = await repo.list_for_user(
            "user-123",
            FavoriteQuery(genre="Shoot", platform="pc", page=2, page_size=5),
        )

        assert total == 12
        assert favorites[0].game.title == "Battle Arena"
        count_query, page_query = db.queries
        assert count_query.table == page_query.table == "favorite_details"
        assert count_query.called("select") == [(("id",), {"count": "exact", "head": True})]
        assert count_query.called("eq") == [(("user_id", "user-123"), {})]
        assert count_query.called("ilike") == [
            (("genre_text", "%Shoot%"), {}),
            (("platform_text", "%pc%"), {}),
        ]
        assert page_query.called("ilike") == count_query.called("ilike")
        assert page_query.called("range") == [((5, 9), {})]

    @pytest.mark.asyncio
    async def test_search_is_escaped_and_quoted(self):
        db = RecordingClient(FakeResponse(count=0))
        repo = FavoriteRepository(db)

        await repo.list_for_user("user-123", FavoriteQuery(search="50%_off"))

        ((condition,), _), = db.queries[0].called("or_")
        assert condition == (
            r'title.ilike."%50\\%\\_off%",'
            r'short_description.ilike."%50\\%\\_off%"'
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "sort_by, expected",
        [
            ("added_at", [(("added_at",), {"desc": True, "nullsfirst": False})]),
            ("title", [(("title",), {})]),
            ("rating", [(("average_rating",), {"desc": True, "nullsfirst": False})]),
            ("release-date", [(("release_date",), {"desc": True, "nullsfirst": False})]),
            ("bogus", [(("added_at",), {"desc": True, "nullsfirst": False})]),
        ],
    )
    async def test_sort_orders_end_with_id(self, sort_by, expected):
        db = RecordingClient(FakeResponse(count=1), FakeResponse([create_mock_favorite_data()]))
        repo = FavoriteRepository(db)

        await repo.list_for_user("user-123", FavoriteQuery(sort_by=sort_by))

        page_query = db.queries[1]
        assert page_query.called("order") == expected + [(("id",), {})]

    @pytest.mark.asyncio
    async def test_page_past_end_returns_empty(self):
        """An out-of-range page should not issue the page query."""
        db = RecordingClient(FakeResponse(count=3))
        repo = FavoriteRepository(db)

        favorites, total = await repo.list_for_user("user-123", FavoriteQuery(page=2, page_size=20))

        assert favorites == []
        assert total == 3
        assert len(db.executed) == 1


class TestWrites:
    @pytest.mark.asyncio
    async def test_create(self):
        row = create_mock_favorite_data()
        for key in ("title", "thumbnail", "short_description", "genre", "platform"):
            row.pop(key)
        db = RecordingClient(FakeResponse([row]))
        repo = FavoriteRepository(db)

        favorite = await repo.create("user-123", "game-123")

        assert favorite.game is None
        assert db.queries[0].called("insert") == [
            (({"user_id": "user-123", "game_id": "game-123"},), {})
        ]

    @pytest.mark.asyncio
    async def test_duplicate_is_translated(self):
        db = RecordingClient()
        repo = FavoriteRepository(db)

        async def reject():
            raise APIError({
                "code": "23505",
                "message": 'duplicate key value violates unique constraint "favorites_user_id_game_id_key"',
            })

        query = db.table("favorites")
        query.execute = reject
        db.table = lambda name: query

        with pytest.raises(DuplicateRecordError) as exc_info:
            await repo.create("user-123", "game-123")
        assert exc_info.value.constraint == "favorites_user_id_game_id_key"

    @pytest.mark.asyncio
    async def test_delete_missing(self):
        db = RecordingClient(FakeResponse([]))
        repo = FavoriteRepository(db)

        assert await repo.delete("user-123", "game-123") is False
        assert db.queries[0].called("eq") == [
            (("user_id", "user-123"), {}),
            (("game_id", "game-123"), {}),
        ]
