"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

import math
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# Pagination defaults shared by every listing endpoint
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class Role(str, Enum):
    """Identity roles, lowest privilege first."""

    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @property
    def rank(self) -> int:
        return _ROLE_RANKS[self]

    def at_least(self, other: "Role") -> bool:
        """True if this role includes every privilege of ``other``."""
        return self.rank >= other.rank


_ROLE_RANKS = {Role.USER: 0, Role.ADMIN: 1, Role.SUPERADMIN: 2}

MODERATOR_ROLES = (Role.ADMIN, Role.SUPERADMIN)


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Built from the identity record the access token points to and made
    available to route handlers via dependency injection.
    """

    id: str = Field(..., description="Identity ID (UUID)")
    email: str = Field(..., description="User's email address")
    name: str = Field(default="", description="Display name")
    username: Optional[str] = Field(None, description="Unique handle")
    role: Role = Field(default=Role.USER, description="User role")
    avatar_url: Optional[str] = Field(None, description="Avatar URL")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }

    @property
    def is_moderator(self) -> bool:
        return self.role in MODERATOR_ROLES


class PaginationMeta(BaseModel):
    """Pagination metadata returned next to every paginated list."""

    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    total_items: int = Field(..., ge=0)
    page_size: int = Field(..., ge=1)
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, page: int, page_size: int, total: int) -> "PaginationMeta":
        """Compute metadata from the requested page and the filtered total."""
        total_pages = math.ceil(total / page_size) if total else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            page_size=page_size,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.page_size

    @property
    def is_out_of_range(self) -> bool:
        return self.offset >= self.total_items


def clamp_page(page: Optional[int]) -> int:
    """Coerce a requested page number to >= 1."""
    if page is None or page < 1:
        return 1
    return page


def clamp_page_size(page_size: Optional[int]) -> int:
    """Coerce a requested page size into [1, MAX_PAGE_SIZE]."""
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return max(1, min(page_size, MAX_PAGE_SIZE))
