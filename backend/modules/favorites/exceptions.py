"""
Favorites module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class FavoriteAlreadyExistsError(ConflictError):
    """Raised when a game is already in the identity's favorites."""

    def __init__(self, user_id: str, game_id: str):
        super().__init__(
            "Game is already in your favorites",
            code="FAVORITE_EXISTS",
            details={"user_id": user_id, "game_id": game_id},
        )


class FavoriteNotFoundError(NotFoundError):
    """Raised when removing a game that is not a favorite."""

    def __init__(self, user_id: str, game_id: str):
        super().__init__(
            "Game not found in favorites",
            code="FAVORITE_NOT_FOUND",
            details={"user_id": user_id, "game_id": game_id},
        )
