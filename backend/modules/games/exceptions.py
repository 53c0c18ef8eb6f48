"""
Games module exceptions.
"""

from typing import Optional

from shared.exceptions import ConflictError, ExternalServiceError, NotFoundError, ValidationError


class GameNotFoundError(NotFoundError):
    """Raised when a game does not exist."""

    def __init__(self, game_id: str):
        super().__init__(
            f"Game not found: {game_id}",
            code="GAME_NOT_FOUND",
            details={"game_id": game_id},
        )


class InvalidGameQueryError(ValidationError):
    """Raised when catalog query parameters contradict each other."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message,
            code="INVALID_QUERY",
            details={"field": field} if field else {},
        )


class DuplicateGameError(ConflictError):
    """Raised when a game with the same external ID already exists."""

    def __init__(self, external_id: Optional[int]):
        super().__init__(
            f"A game with external ID {external_id} already exists",
            code="DUPLICATE_GAME",
            details={"external_id": external_id},
        )


class CatalogSourceError(ExternalServiceError):
    """Raised when the external catalog cannot be fetched or parsed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            service="catalog",
            code="CATALOG_SOURCE_ERROR",
            details={"status_code": status_code} if status_code else {},
        )
