"""
Reviews module data models.

A review is the rated, commented edge between one identity and one game.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from shared.models import PaginationMeta


RATING_MIN = 1
RATING_MAX = 5
CONTENT_MIN_LENGTH = 1
CONTENT_MAX_LENGTH = 1000


class Review(BaseModel):
    """A stored review, optionally enriched with author and game details."""

    id: str = Field(..., description="Review ID (UUID)")
    user_id: str = Field(..., description="Author identity ID")
    game_id: str = Field(..., description="Reviewed game ID")
    rating: int = Field(..., ge=RATING_MIN, le=RATING_MAX)
    content: str
    created_at: datetime
    updated_at: datetime

    # Read-side enrichment from the review_details view
    author_name: Optional[str] = None
    author_username: Optional[str] = None
    author_avatar_url: Optional[str] = None
    game_title: Optional[str] = None
    game_thumbnail: Optional[str] = None


class ReviewRequest(BaseModel):
    """Body of a review submission or update."""

    rating: int = Field(
        ...,
        ge=RATING_MIN,
        le=RATING_MAX,
        description="Rating must be a number between 1 and 5",
    )
    content: str = Field(
        ...,
        min_length=CONTENT_MIN_LENGTH,
        max_length=CONTENT_MAX_LENGTH,
        description="Review content must be between 1 and 1000 characters",
    )

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class ReviewSubmission(BaseModel):
    """Result of an upsert: the stored review and which path was taken."""

    review: Review
    created: bool = Field(..., description="True if a new review was inserted")
    message: str


class GameReviewsResponse(BaseModel):
    """Reviews of one game, the requester's own review first."""

    reviews: list[Review]
    user_review: Optional[Review] = None
    total_reviews: int


class ReviewListResponse(BaseModel):
    reviews: list[Review]
    pagination: PaginationMeta


class RatingSummary(BaseModel):
    """The aggregate the Rating Aggregator writes back to a game."""

    game_id: str
    average_rating: float = Field(..., ge=0, le=5)
    total_reviews: int = Field(..., ge=0)


class ReconcileResult(BaseModel):
    games_checked: int
    games_corrected: int
