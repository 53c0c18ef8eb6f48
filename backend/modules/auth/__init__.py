"""
Authentication module.

Handles token issuance and validation, role checks and ownership checks.

Public API:
- IAuthService: Interface for auth operations
- TokenPair / AccessTokenResponse: Issued tokens
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import (
    JWTPayload,
    TokenType,
    TokenPair,
    RefreshRequest,
    AccessTokenResponse,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
    InsufficientPermissionsError,
    OwnershipRequiredError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "JWTPayload",
    "TokenType",
    "TokenPair",
    "RefreshRequest",
    "AccessTokenResponse",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "UserNotFoundError",
    "InsufficientPermissionsError",
    "OwnershipRequiredError",
]
