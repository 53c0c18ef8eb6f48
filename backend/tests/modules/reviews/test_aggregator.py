"""Tests for the rating aggregator."""

import logging

import pytest
from unittest.mock import AsyncMock

from modules.reviews.aggregator import RatingAggregator, average_of

from tests.fakes import FakeDatabase, FakeGameRepository, FakeReviewRepository


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def games(db):
    return FakeGameRepository(db)


@pytest.fixture
def reviews(db):
    return FakeReviewRepository(db)


@pytest.fixture
def aggregator(reviews, games):
    return RatingAggregator(reviews=reviews, games=games)


class TestAverageOf:
    def test_empty(self):
        assert average_of([]) == 0.0

    def test_single(self):
        assert average_of([5]) == 5.0

    def test_rounds_to_two_decimals(self):
        assert average_of([5, 4, 4]) == 4.33
        assert average_of([5, 5, 4]) == 4.67

    def test_rounds_half_up(self):
        """Means ending in 5 at the third decimal should round up."""
        # 33 / 8 = 4.125
        assert average_of([5, 5, 5, 5, 5, 4, 3, 1]) == 4.13


class TestRecompute:
    @pytest.mark.asyncio
    async def test_two_reviews(self, db, aggregator, reviews):
        """Ratings 5 and 3 should give an average of 4.0 over 2 reviews."""
        game = db.add_game()
        await reviews.create("u1", game.id, 5, "great")
        await reviews.create("u2", game.id, 3, "fine")

        summary = await aggregator.recompute(game.id)

        assert summary.average_rating == 4.0
        assert summary.total_reviews == 2
        assert db.games[game.id]["average_rating"] == 4.0
        assert db.games[game.id]["total_reviews"] == 2

    @pytest.mark.asyncio
    async def test_no_reviews_resets_to_zero(self, db, aggregator):
        game = db.add_game(average_rating=3.5, total_reviews=4)

        summary = await aggregator.recompute(game.id)

        assert summary.average_rating == 0
        assert summary.total_reviews == 0
        assert db.games[game.id]["total_reviews"] == 0

    @pytest.mark.asyncio
    async def test_idempotent(self, db, aggregator, reviews):
        """Running twice without a change should store the same aggregate."""
        game = db.add_game()
        await reviews.create("u1", game.id, 4, "good")

        first = await aggregator.recompute(game.id)
        second = await aggregator.recompute(game.id)

        assert first == second

    @pytest.mark.asyncio
    async def test_missing_game_is_not_an_error(self, aggregator, games):
        """Recomputing a deleted game should write nothing and not raise."""
        summary = await aggregator.recompute("gone")
        assert summary.total_reviews == 0
        assert games.rating_writes == [("gone", 0.0, 0)]


class TestRecomputeSafely:
    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, caplog):
        reviews = AsyncMock()
        reviews.get_ratings.side_effect = RuntimeError("database down")
        aggregator = RatingAggregator(reviews=reviews, games=AsyncMock())

        with caplog.at_level(logging.ERROR, logger="modules.reviews.aggregator"):
            result = await aggregator.recompute_safely("game-1")

        assert result is None
        assert "game-1" in caplog.text

    @pytest.mark.asyncio
    async def test_recompute_many_deduplicates(self, db, aggregator, games):
        first = db.add_game()
        second = db.add_game()

        summaries = await aggregator.recompute_many([first.id, second.id, first.id])

        assert [s.game_id for s in summaries] == [first.id, second.id]
        assert len(games.rating_writes) == 2


class TestReconcileAll:
    @pytest.mark.asyncio
    async def test_corrects_only_drifted_games(self, db, aggregator, reviews, games):
        """Should rewrite games whose stored aggregate disagrees with their reviews."""
        accurate = db.add_game(average_rating=5.0, total_reviews=1)
        drifted = db.add_game(average_rating=1.0, total_reviews=7)
        untouched = db.add_game()
        await reviews.create("u1", accurate.id, 5, "great")
        await reviews.create("u1", drifted.id, 4, "good")
        await reviews.create("u2", drifted.id, 2, "meh")

        result = await aggregator.reconcile_all()

        assert result.games_checked == 3
        assert result.games_corrected == 1
        assert db.games[drifted.id]["average_rating"] == 3.0
        assert db.games[drifted.id]["total_reviews"] == 2
        assert db.games[untouched.id]["total_reviews"] == 0
        assert [w[0] for w in games.rating_writes] == [drifted.id]
