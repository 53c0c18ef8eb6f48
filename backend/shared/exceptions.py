"""
Base exception classes for the GameHub backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps every base class to a single HTTP status, so a module
only has to choose the right parent.
"""

from typing import Optional, Any


class GameHubError(Exception):
    """
    Base exception for all GameHub errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(GameHubError):
    """Resource not found."""

    pass


class ValidationError(GameHubError):
    """Input validation failed."""

    pass


class ConflictError(GameHubError):
    """Uniqueness violation (duplicate favorite, handle, external id...)."""

    pass


class AuthenticationError(GameHubError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(GameHubError):
    """Authorization failed (insufficient permissions or not the owner)."""

    pass


class ExternalServiceError(GameHubError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class DuplicateRecordError(ConflictError):
    """Raised by repositories when the datastore rejects a duplicate key."""

    def __init__(self, table: str, constraint: Optional[str] = None):
        super().__init__(
            f"Duplicate record in {table}",
            code="DUPLICATE_RECORD",
            details={"table": table, "constraint": constraint},
        )
        self.table = table
        self.constraint = constraint
