"""
Rating Aggregator.

Keeps ``games.average_rating`` and ``games.total_reviews`` equal to the
mean and count of the game's stored reviews. Every recompute reads the
full set of ratings, so running it twice, or concurrently with another
recompute of the same game, converges on the same value.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from .models import RatingSummary, ReconcileResult
from .repository import ReviewRepository


logger = logging.getLogger(__name__)

# Two decimal places, half-up: 4.125 -> 4.13
RATING_PRECISION = Decimal("0.01")


def average_of(ratings: list[int]) -> float:
    """Mean of ``ratings`` rounded to ``RATING_PRECISION``, or 0 when empty."""
    if not ratings:
        return 0.0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(RATING_PRECISION, rounding=ROUND_HALF_UP))


class RatingAggregator:
    """
    Recomputes per-game rating aggregates from the review relation.

    Args:
        reviews: Source of truth for ratings
        games: Any repository exposing ``update_rating`` and
            ``list_rating_snapshots`` (the game repository)
    """

    def __init__(self, reviews: ReviewRepository, games):
        self._reviews = reviews
        self._games = games

    async def recompute(self, game_id: str) -> RatingSummary:
        """
        Recompute and store the aggregate of one game.

        Returns:
            The aggregate written to the game
        """
        ratings = await self._reviews.get_ratings(game_id)
        summary = RatingSummary(
            game_id=game_id,
            average_rating=average_of(ratings),
            total_reviews=len(ratings),
        )
        updated = await self._games.update_rating(
            game_id, summary.average_rating, summary.total_reviews
        )
        if not updated:
            logger.debug(f"Game {game_id} no longer exists, rating not stored")
        return summary

    async def recompute_safely(self, game_id: str) -> Optional[RatingSummary]:
        """
        Recompute after a committed write.

        Failures are logged and None is returned; the triggering write
        stays committed. ``reconcile_all`` repairs aggregates left stale.
        """
        try:
            return await self.recompute(game_id)
        except Exception:
            logger.exception(f"Failed to recompute rating for game {game_id}")
            return None

    async def recompute_many(self, game_ids: Iterable[str]) -> list[RatingSummary]:
        """Recompute each distinct game once, in first-seen order."""
        summaries = []
        for game_id in dict.fromkeys(game_ids):
            summary = await self.recompute_safely(game_id)
            if summary is not None:
                summaries.append(summary)
        return summaries

    async def reconcile_all(self) -> ReconcileResult:
        """
        Sweep every game and correct aggregates that drifted.

        Returns:
            How many games were checked and how many were rewritten
        """
        snapshots = await self._games.list_rating_snapshots()
        corrected = 0
        for snapshot in snapshots:
            game_id = str(snapshot["id"])
            ratings = await self._reviews.get_ratings(game_id)
            expected_average = average_of(ratings)
            expected_total = len(ratings)

            stored_average = float(snapshot.get("average_rating") or 0)
            stored_total = int(snapshot.get("total_reviews") or 0)
            if stored_average == expected_average and stored_total == expected_total:
                continue

            await self._games.update_rating(game_id, expected_average, expected_total)
            corrected += 1
            logger.info(
                f"Corrected rating for game {game_id}: "
                f"{stored_average}/{stored_total} -> {expected_average}/{expected_total}"
            )

        logger.info(f"Rating reconciliation checked {len(snapshots)} games, corrected {corrected}")
        return ReconcileResult(games_checked=len(snapshots), games_corrected=corrected)
