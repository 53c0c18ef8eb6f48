"""
Reviews service implementation.

Owns the review relation and triggers the Rating Aggregator after every
successful change.
"""

import logging
from typing import Optional

from shared.exceptions import DuplicateRecordError
from shared.models import AuthenticatedUser, PaginationMeta, clamp_page, clamp_page_size
from modules.games.exceptions import GameNotFoundError
from .aggregator import RatingAggregator
from .exceptions import InvalidReviewError, ReviewAccessDeniedError, ReviewNotFoundError
from .interfaces import IReviewService
from .models import (
    CONTENT_MAX_LENGTH,
    CONTENT_MIN_LENGTH,
    RATING_MAX,
    RATING_MIN,
    GameReviewsResponse,
    Review,
    ReviewListResponse,
    ReviewSubmission,
)
from .repository import ReviewRepository


logger = logging.getLogger(__name__)


class ReviewService(IReviewService):
    """
    Review service backed by ReviewRepository.

    Args:
        repository: Review data access
        games: Game repository, used to check a game exists
        aggregator: Recomputes rating aggregates after each change
    """

    def __init__(
        self,
        repository: ReviewRepository,
        games,
        aggregator: RatingAggregator,
    ):
        self._repo = repository
        self._games = games
        self._aggregator = aggregator

    async def submit(
        self,
        user_id: str,
        game_id: str,
        rating: int,
        content: str,
    ) -> ReviewSubmission:
        content = self._validate(rating, content)
        if not await self._games.exists(game_id):
            raise GameNotFoundError(game_id)

        existing = await self._repo.get_for_pair(user_id, game_id)
        created = existing is None
        if existing is not None:
            review = await self._replace(existing.id, rating, content)
        else:
            try:
                review = await self._repo.create(user_id, game_id, rating, content)
            except DuplicateRecordError:
                # Lost a concurrent first submission; update the winner's row
                existing = await self._repo.get_for_pair(user_id, game_id)
                if existing is None:
                    raise
                created = False
                review = await self._replace(existing.id, rating, content)

        await self._aggregator.recompute_safely(game_id)
        logger.info(
            f"Review {'created' if created else 'updated'} by user {user_id} for game {game_id}"
        )
        return ReviewSubmission(
            review=await self._reload(review),
            created=created,
            message="Review created successfully" if created else "Review updated successfully",
        )

    async def update(
        self,
        review_id: str,
        actor: AuthenticatedUser,
        rating: int,
        content: str,
    ) -> Review:
        content = self._validate(rating, content)
        existing = await self._repo.get_by_id(review_id)
        if existing is None:
            raise ReviewNotFoundError(review_id)
        if existing.user_id != actor.id:
            raise ReviewAccessDeniedError(review_id, actor.id)

        review = await self._replace(review_id, rating, content)
        await self._aggregator.recompute_safely(existing.game_id)
        return await self._reload(review)

    async def delete(self, review_id: str, actor: AuthenticatedUser) -> None:
        existing = await self._repo.get_by_id(review_id)
        if existing is None:
            raise ReviewNotFoundError(review_id)
        if existing.user_id != actor.id and not actor.is_moderator:
            raise ReviewNotFoundError(review_id)

        if not await self._repo.delete(review_id):
            raise ReviewNotFoundError(review_id)
        await self._aggregator.recompute_safely(existing.game_id)

        if existing.user_id != actor.id:
            logger.info(f"Review {review_id} removed by moderator {actor.id}")

    async def list_for_game(
        self,
        game_id: str,
        requester_id: Optional[str] = None,
    ) -> GameReviewsResponse:
        if not await self._games.exists(game_id):
            raise GameNotFoundError(game_id)

        reviews = await self._repo.list_for_game(game_id)
        user_review = None
        if requester_id:
            user_review = next((r for r in reviews if r.user_id == requester_id), None)
        if user_review is not None:
            reviews = [user_review] + [r for r in reviews if r.id != user_review.id]

        return GameReviewsResponse(
            reviews=reviews,
            user_review=user_review,
            total_reviews=len(reviews),
        )

    async def list_for_user(
        self,
        user_id: str,
        page: int = 1,
        page_size: int = 20,
    ) -> ReviewListResponse:
        page, page_size = clamp_page(page), clamp_page_size(page_size)
        reviews, total = await self._repo.list_for_user(user_id, page, page_size)
        return ReviewListResponse(
            reviews=reviews,
            pagination=PaginationMeta.build(page, page_size, total),
        )

    async def list_all(
        self,
        page: int = 1,
        page_size: int = 20,
        game_id: Optional[str] = None,
    ) -> ReviewListResponse:
        page, page_size = clamp_page(page), clamp_page_size(page_size)
        reviews, total = await self._repo.list_all(page, page_size, game_id=game_id)
        return ReviewListResponse(
            reviews=reviews,
            pagination=PaginationMeta.build(page, page_size, total),
        )

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _validate(self, rating: int, content: str) -> str:
        """Check bounds and return the trimmed content."""
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise InvalidReviewError("rating", "Rating must be a whole number between 1 and 5")
        if not RATING_MIN <= rating <= RATING_MAX:
            raise InvalidReviewError("rating", "Rating must be a number between 1 and 5")

        content = (content or "").strip()
        if not CONTENT_MIN_LENGTH <= len(content) <= CONTENT_MAX_LENGTH:
            raise InvalidReviewError(
                "content",
                "Review content must be between 1 and 1000 characters",
            )
        return content

    async def _replace(self, review_id: str, rating: int, content: str) -> Review:
        review = await self._repo.update(review_id, rating, content)
        if review is None:
            raise ReviewNotFoundError(review_id)
        return review

    async def _reload(self, review: Review) -> Review:
        """Re-read through the details view to pick up author fields."""
        return await self._repo.get_by_id(review.id) or review
