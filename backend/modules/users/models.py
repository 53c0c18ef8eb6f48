"""
Users module data models.

These models define the identity record and the requests that mutate it.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from shared.models import AuthenticatedUser, PaginationMeta, Role


NAME_MAX_LENGTH = 50
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = r"^[A-Za-z0-9_-]+$"


class User(BaseModel):
    """One authenticated person, as stored in the ``users`` table."""

    id: str = Field(..., description="Identity ID (UUID)")
    provider_id: str = Field(..., description="External identity provider ID")
    email: str = Field(..., description="Lowercased email address")
    name: str = Field(..., description="Display name")
    username: Optional[str] = Field(None, description="Unique handle (lowercase)")
    role: Role = Field(default=Role.USER, description="User role")
    avatar_url: Optional[str] = Field(None, description="Avatar URL")
    avatar_public_id: Optional[str] = Field(
        None,
        description="Object-store ID of an uploaded avatar (None for provider photos)",
    )
    created_at: datetime
    updated_at: datetime

    def to_authenticated(self) -> AuthenticatedUser:
        return AuthenticatedUser(
            id=self.id,
            email=self.email,
            name=self.name,
            username=self.username,
            role=self.role,
            avatar_url=self.avatar_url,
        )


class ProviderProfile(BaseModel):
    """Identity data handed over by the external login exchange."""

    provider_id: str = Field(..., min_length=1)
    email: EmailStr
    name: str = Field(..., min_length=1)
    avatar_url: Optional[str] = None


class UserProfileResponse(BaseModel):
    """Public view of an identity (no provider ID)."""

    id: str
    name: str
    username: Optional[str] = None
    email: str
    role: Role
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfileResponse":
        return cls(
            id=user.id,
            name=user.name,
            username=user.username,
            email=user.email,
            role=user.role,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UpdateProfileRequest(BaseModel):
    """Request to update the caller's display name and optionally handle."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    username: Optional[str] = Field(
        None,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        pattern=USERNAME_PATTERN,
    )


class SetAvatarRequest(BaseModel):
    """Avatar reference returned by the object store after an upload."""

    avatar_url: str = Field(..., min_length=1)
    public_id: Optional[str] = None


class UsernameAvailability(BaseModel):
    username: str
    available: bool
    message: str


class UserListResponse(BaseModel):
    users: list[UserProfileResponse]
    pagination: PaginationMeta


class UpdateRoleRequest(BaseModel):
    role: Role
