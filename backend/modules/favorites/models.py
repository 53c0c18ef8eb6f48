"""
Favorites module data models.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from shared.models import DEFAULT_PAGE_SIZE, PaginationMeta, clamp_page, clamp_page_size


class FavoriteSort(str, Enum):
    ADDED_AT = "added_at"
    TITLE = "title"
    RATING = "rating"
    RELEASE_DATE = "release-date"


class FavoriteGame(BaseModel):
    """Game summary attached to a favorite on reads."""

    id: str
    title: str
    thumbnail: str
    short_description: str
    genre: list[str] = Field(default_factory=list)
    platform: list[str] = Field(default_factory=list)
    release_date: Optional[date] = None
    average_rating: float = 0
    total_reviews: int = 0


class Favorite(BaseModel):
    """One identity's bookmark of one game."""

    id: str = Field(..., description="Favorite ID (UUID)")
    user_id: str
    game_id: str
    added_at: datetime
    game: Optional[FavoriteGame] = None


class FavoriteQuery(BaseModel):
    """Filters, sort and pagination for a favorites listing."""

    genre: Optional[str] = None
    platform: Optional[str] = None
    search: Optional[str] = None
    sort_by: FavoriteSort = FavoriteSort.ADDED_AT
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    model_config = {"extra": "ignore"}

    @field_validator("genre", "platform", "search", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("sort_by", mode="before")
    @classmethod
    def default_sort(cls, value):
        if value == "addedAt":
            return FavoriteSort.ADDED_AT
        try:
            return FavoriteSort(value)
        except ValueError:
            return FavoriteSort.ADDED_AT

    @field_validator("page", mode="before")
    @classmethod
    def clamp_page_number(cls, value):
        return clamp_page(int(value) if value is not None else None)

    @field_validator("page_size", mode="before")
    @classmethod
    def clamp_size(cls, value):
        return clamp_page_size(int(value) if value is not None else None)


class FavoriteStatus(BaseModel):
    is_favorite: bool
    favorite_id: Optional[str] = None
    added_at: Optional[datetime] = None


class FavoriteListResponse(BaseModel):
    favorites: list[Favorite]
    pagination: PaginationMeta


class FavoriteIdsResponse(BaseModel):
    game_ids: list[str]
