"""
Users module.

Handles identity records: provider logins, profiles, avatars, account
deletion and role management.

Public API:
- IUserService: Interface for identity operations
- User: Stored identity record
- ProviderProfile: Identity data from the external login provider
"""

from .interfaces import IUserService
from .models import (
    User,
    ProviderProfile,
    UserProfileResponse,
    UpdateProfileRequest,
    SetAvatarRequest,
    UsernameAvailability,
    UserListResponse,
    UpdateRoleRequest,
)
from .exceptions import (
    UserNotFoundError,
    InvalidProfileError,
    UsernameTakenError,
    NoAvatarError,
    SelfDemotionError,
)

__all__ = [
    # Interface
    "IUserService",
    # Models
    "User",
    "ProviderProfile",
    "UserProfileResponse",
    "UpdateProfileRequest",
    "SetAvatarRequest",
    "UsernameAvailability",
    "UserListResponse",
    "UpdateRoleRequest",
    # Exceptions
    "UserNotFoundError",
    "InvalidProfileError",
    "UsernameTakenError",
    "NoAvatarError",
    "SelfDemotionError",
]
