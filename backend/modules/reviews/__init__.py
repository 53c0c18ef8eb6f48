"""
Reviews module.

Handles the review relation and keeps game rating aggregates in sync.

Public API:
- IReviewService: Interface for review operations
- RatingAggregator: Recomputes a game's average rating and review count
- Review: A stored review
- ReviewSubmission: Result of creating or replacing a review
"""

from .interfaces import IReviewService
from .aggregator import RatingAggregator, RATING_PRECISION, average_of
from .models import (
    Review,
    ReviewRequest,
    ReviewSubmission,
    GameReviewsResponse,
    ReviewListResponse,
    RatingSummary,
    ReconcileResult,
)
from .exceptions import (
    ReviewNotFoundError,
    ReviewAccessDeniedError,
    InvalidReviewError,
)

__all__ = [
    # Interface
    "IReviewService",
    # Aggregation
    "RatingAggregator",
    "RATING_PRECISION",
    "average_of",
    # Models
    "Review",
    "ReviewRequest",
    "ReviewSubmission",
    "GameReviewsResponse",
    "ReviewListResponse",
    "RatingSummary",
    "ReconcileResult",
    # Exceptions
    "ReviewNotFoundError",
    "ReviewAccessDeniedError",
    "InvalidReviewError",
]
