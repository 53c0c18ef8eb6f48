"""
Reviews module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class ReviewNotFoundError(NotFoundError):
    """
    Raised when a review does not exist.

    Also raised when a caller who is neither the owner nor a moderator tries
    to delete someone else's review, so existence is not leaked.
    """

    def __init__(self, review_id: str):
        super().__init__(
            "Review not found or you are not authorized to modify it",
            code="REVIEW_NOT_FOUND",
            details={"review_id": review_id},
        )


class ReviewAccessDeniedError(AuthorizationError):
    """Raised when someone other than the author updates a review."""

    def __init__(self, review_id: str, user_id: str):
        super().__init__(
            f"Access denied to review: {review_id}",
            code="REVIEW_ACCESS_DENIED",
            details={"review_id": review_id, "user_id": user_id},
        )


class InvalidReviewError(ValidationError):
    """Raised when a rating or content is out of bounds."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message,
            code="INVALID_REVIEW",
            details={"field": field},
        )
