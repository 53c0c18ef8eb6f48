"""
Reviews module interface.

Other modules should depend on IReviewService, not the concrete implementation.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser
from .models import GameReviewsResponse, Review, ReviewListResponse, ReviewSubmission


@runtime_checkable
class IReviewService(Protocol):
    """
    Interface for the review relation.

    Every operation that changes a review recomputes the game's rating
    aggregate before returning.
    """

    async def submit(
        self,
        user_id: str,
        game_id: str,
        rating: int,
        content: str,
    ) -> ReviewSubmission:
        """
        Create the caller's review of a game, or replace it if one exists.

        Raises:
            GameNotFoundError: If the game does not exist
            InvalidReviewError: If rating or content is out of bounds
        """
        ...

    async def update(
        self,
        review_id: str,
        actor: AuthenticatedUser,
        rating: int,
        content: str,
    ) -> Review:
        """
        Change an existing review. Only its author may do this.

        Raises:
            ReviewNotFoundError: If the review does not exist
            ReviewAccessDeniedError: If the actor is not the author
        """
        ...

    async def delete(self, review_id: str, actor: AuthenticatedUser) -> None:
        """
        Delete a review as its author or as a moderator.

        Raises:
            ReviewNotFoundError: If the review does not exist or the actor
                may not delete it
        """
        ...

    async def list_for_game(
        self,
        game_id: str,
        requester_id: Optional[str] = None,
    ) -> GameReviewsResponse:
        """Reviews of a game, newest first, the requester's own review first."""
        ...

    async def list_for_user(
        self,
        user_id: str,
        page: int = 1,
        page_size: int = 20,
    ) -> ReviewListResponse:
        """One identity's reviews, newest first."""
        ...

    async def list_all(
        self,
        page: int = 1,
        page_size: int = 20,
        game_id: Optional[str] = None,
    ) -> ReviewListResponse:
        """Moderation listing of every review."""
        ...
