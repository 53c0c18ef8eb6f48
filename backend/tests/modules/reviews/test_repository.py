"""Tests for the review repository."""

import pytest
from datetime import datetime, timezone

from postgrest.exceptions import APIError

from shared.exceptions import DuplicateRecordError
from shared.repository import FETCH_CHUNK_SIZE
from modules.reviews.repository import ReviewRepository

from tests.fakes import FakeResponse, RecordingClient


def create_mock_review_data(
    review_id: str = "review-123",
    user_id: str = "user-123",
    game_id: str = "game-123",
    rating: int = 4,
) -> dict:
    """Helper to create mock review_details data."""
    now = datetime.now(timezone.utc).isoformat()
    return {
        "id": review_id,
        "user_id": user_id,
        "game_id": game_id,
        "rating": rating,
        "content": "Solid game",
        "created_at": now,
        "updated_at": now,
        "author_name": "Test User",
        "author_username": "tester",
        "author_avatar_url": None,
        "game_title": "Battle Arena",
        "game_thumbnail": "https://img.example.com/1.jpg",
    }


class TestReviewRepositoryReads:
    @pytest.mark.asyncio
    async def test_get_by_id_reads_details_view(self):
        """Should read from the view and map author fields."""
        db = RecordingClient(FakeResponse([create_mock_review_data()]))
        repo = ReviewRepository(db)

        review = await repo.get_by_id("review-123")

        assert db.queries[0].table == "review_details"
        assert review.author_name == "Test User"
        assert review.game_title == "Battle Arena"

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self):
        repo = ReviewRepository(RecordingClient(FakeResponse([])))
        assert await repo.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_list_for_game_orders_newest_first(self):
        db = RecordingClient(FakeResponse([create_mock_review_data()]))
        repo = ReviewRepository(db)

        reviews = await repo.list_for_game("game-123")

        assert len(reviews) == 1
        orders = db.queries[0].called("order")
        assert orders[0] == (("created_at",), {"desc": True})
        assert orders[1] == (("id",), {})

    @pytest.mark.asyncio
    async def test_get_ratings_reads_every_chunk(self):
        """Should keep fetching while chunks come back full."""
        full = FakeResponse([{"id": str(i), "rating": 5} for i in range(FETCH_CHUNK_SIZE)])
        tail = FakeResponse([{"id": "last", "rating": 1}])
        db = RecordingClient(full, tail)
        repo = ReviewRepository(db)

        ratings = await repo.get_ratings("game-123")

        assert len(ratings) == FETCH_CHUNK_SIZE + 1
        assert db.queries[0].called("range") == [((0, FETCH_CHUNK_SIZE - 1), {})]
        assert db.queries[1].called("range") == [
            ((FETCH_CHUNK_SIZE, 2 * FETCH_CHUNK_SIZE - 1), {})
        ]

    @pytest.mark.asyncio
    async def test_game_ids_for_user_distinct(self):
        db = RecordingClient(FakeResponse([{"game_id": "a"}, {"game_id": "a"}, {"game_id": "b"}]))
        repo = ReviewRepository(db)

        assert await repo.game_ids_for_user("user-123") == ["a", "b"]


class TestReviewRepositoryPaging:
    @pytest.mark.asyncio
    async def test_page_past_end_skips_data_query(self):
        """Should return the total without issuing the page query."""
        db = RecordingClient(FakeResponse(count=3))
        repo = ReviewRepository(db)

        reviews, total = await repo.list_for_user("user-123", page=5, page_size=20)

        assert reviews == []
        assert total == 3
        assert len(db.executed) == 1

    @pytest.mark.asyncio
    async def test_page_range(self):
        db = RecordingClient(
            FakeResponse(count=45),
            FakeResponse([create_mock_review_data()]),
        )
        repo = ReviewRepository(db)

        reviews, total = await repo.list_all(page=2, page_size=20, game_id="game-123")

        assert total == 45
        assert len(reviews) == 1
        count_query, page_query = db.queries
        assert count_query.table == "reviews"
        assert count_query.called("eq") == [(("game_id", "game-123"), {})]
        assert page_query.table == "review_details"
        assert page_query.called("range") == [((20, 39), {})]


class TestReviewRepositoryWrites:
    @pytest.mark.asyncio
    async def test_create_duplicate_pair(self):
        """A unique violation should surface as DuplicateRecordError."""
        db = RecordingClient()
        repo = ReviewRepository(db)

        async def reject():
            raise APIError({
                "code": "23505",
                "message": 'duplicate key value violates unique constraint "reviews_user_id_game_id_key"',
            })

        query = db.table("reviews")
        query.execute = reject
        db.table = lambda name: query

        with pytest.raises(DuplicateRecordError) as exc_info:
            await repo.create("user-123", "game-123", 5, "Great")
        assert exc_info.value.constraint == "reviews_user_id_game_id_key"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self):
        repo = ReviewRepository(RecordingClient(FakeResponse([])))
        assert await repo.update("missing", 3, "Fine") is None

    @pytest.mark.asyncio
    async def test_update_stamps_updated_at(self):
        db = RecordingClient(FakeResponse([create_mock_review_data()]))
        repo = ReviewRepository(db)

        await repo.update("review-123", 3, "Fine")

        (payload,), _ = db.queries[0].called("update")[0]
        assert payload["rating"] == 3
        assert "updated_at" in payload

    @pytest.mark.asyncio
    async def test_delete_reports_whether_a_row_went(self):
        repo = ReviewRepository(RecordingClient(FakeResponse([{"id": "r"}]), FakeResponse([])))
        assert await repo.delete("r") is True
        assert await repo.delete("r") is False
