"""
Review API endpoints.

Domain errors propagate to the exception handlers registered in api.app.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import get_review_service
from api.middleware.auth import get_current_user, get_optional_user
from shared.models import AuthenticatedUser, DEFAULT_PAGE_SIZE

from .interfaces import IReviewService
from .models import (
    GameReviewsResponse,
    Review,
    ReviewListResponse,
    ReviewRequest,
    ReviewSubmission,
)

router = APIRouter()


@router.get("/me", response_model=ReviewListResponse)
async def list_my_reviews(
    page: int = Query(default=1, description="Page number (values below 1 mean 1)"),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, description="Items per page (1-100)"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IReviewService = Depends(get_review_service),
) -> ReviewListResponse:
    """List the current user's reviews, newest first."""
    return await service.list_for_user(user.id, page, page_size)


@router.get("/game/{game_id}", response_model=GameReviewsResponse)
async def list_game_reviews(
    game_id: UUID,
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: IReviewService = Depends(get_review_service),
) -> GameReviewsResponse:
    """
    List reviews of a game.

    When the caller is signed in, their own review comes first and is also
    returned as ``user_review``.
    """
    return await service.list_for_game(str(game_id), user.id if user else None)


@router.post("/game/{game_id}", response_model=ReviewSubmission, status_code=201)
async def submit_review(
    game_id: UUID,
    request: ReviewRequest,
    response: Response,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IReviewService = Depends(get_review_service),
) -> ReviewSubmission:
    """
    Create or replace the caller's review of a game.

    Responds 201 when a review was created and 200 when an existing one
    was updated.
    """
    submission = await service.submit(user.id, str(game_id), request.rating, request.content)
    if not submission.created:
        response.status_code = 200
    return submission


@router.put("/{review_id}", response_model=Review)
async def update_review(
    review_id: UUID,
    request: ReviewRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IReviewService = Depends(get_review_service),
) -> Review:
    """Update one of the caller's reviews."""
    return await service.update(str(review_id), user, request.rating, request.content)


@router.delete("/{review_id}", status_code=204)
async def delete_review(
    review_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IReviewService = Depends(get_review_service),
) -> None:
    """Delete a review (author, admin or superadmin)."""
    await service.delete(str(review_id), user)
