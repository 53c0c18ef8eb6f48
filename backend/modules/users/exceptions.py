"""
Users module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when an identity does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InvalidProfileError(ValidationError):
    """Raised when a profile field fails validation."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message,
            code="INVALID_PROFILE",
            details={"field": field},
        )


class UsernameTakenError(ConflictError):
    """Raised when a handle is already used by another identity."""

    def __init__(self, username: str):
        super().__init__(
            "This username is already taken. Please choose a different one.",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class NoAvatarError(ValidationError):
    """Raised when clearing an avatar that was never set."""

    def __init__(self):
        super().__init__("No avatar to delete", code="NO_AVATAR")


class SelfDemotionError(ValidationError):
    """Raised when a superadmin tries to lower their own role."""

    def __init__(self):
        super().__init__(
            "SuperAdmin cannot demote themselves",
            code="SELF_DEMOTION",
        )
