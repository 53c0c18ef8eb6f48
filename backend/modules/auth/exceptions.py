"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, AuthorizationError


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class UserNotFoundError(AuthenticationError):
    """Raised when a valid token points at an identity that no longer exists."""

    def __init__(self, user_id: str):
        super().__init__(
            "Token is valid but user no longer exists",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_roles: list[str], user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {', '.join(required_roles)}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_roles": required_roles, "user_role": user_role},
        )


class OwnershipRequiredError(AuthorizationError):
    """Raised when a user acts on a resource owned by someone else."""

    def __init__(self, user_id: str, owner_id: str):
        super().__init__(
            "Access denied. You can only access your own resources.",
            code="OWNERSHIP_REQUIRED",
            details={"user_id": user_id, "owner_id": owner_id},
        )
