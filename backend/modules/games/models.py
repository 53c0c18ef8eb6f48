"""
Games module data models.

These models define the catalog record, the admin write requests, and the
validated query object the Catalog Query Engine consumes.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from shared.models import (
    DEFAULT_PAGE_SIZE,
    PaginationMeta,
    clamp_page,
    clamp_page_size,
)


class SortOption(str, Enum):
    """Catalog orderings accepted by ``sort_by``."""

    RELEVANCE = "relevance"
    RELEASE_DATE = "release-date"
    ALPHABETICAL = "alphabetical"
    RATING = "rating"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]


_SORT_LABELS = {
    SortOption.RELEVANCE: "Most Relevant",
    SortOption.RELEASE_DATE: "Release Date",
    SortOption.ALPHABETICAL: "A-Z",
    SortOption.RATING: "Highest Rated",
}


def _split_list(value):
    """Accept either a list or a comma-separated string for array fields."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class Game(BaseModel):
    """A catalog entry."""

    id: str = Field(..., description="Game ID (UUID)")
    external_id: Optional[int] = Field(None, description="ID in the external catalog")
    title: str
    thumbnail: str
    background_image: Optional[str] = None
    short_description: str
    game_url: str
    genre: list[str] = Field(default_factory=list)
    platform: list[str] = Field(default_factory=list)
    publisher: str = ""
    developer: str = ""
    release_date: Optional[date] = None
    average_rating: float = Field(default=0, ge=0, le=5)
    total_reviews: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime


class GameCreate(BaseModel):
    """Admin request to add a game. Rating aggregates always start at zero."""

    title: str = Field(..., min_length=1, max_length=200)
    thumbnail: str = Field(..., min_length=1)
    background_image: Optional[str] = None
    short_description: str = Field(..., min_length=1, max_length=1000)
    game_url: str = Field(..., min_length=1)
    genre: list[str] = Field(default_factory=list)
    platform: list[str] = Field(default_factory=list)
    publisher: str = ""
    developer: str = ""
    release_date: Optional[date] = None
    external_id: Optional[int] = None

    @field_validator("genre", "platform", mode="before")
    @classmethod
    def split_arrays(cls, value):
        return _split_list(value)


class GameUpdate(BaseModel):
    """
    Admin request to edit a game.

    ``average_rating`` and ``total_reviews`` are not part of this model, so
    they are ignored if a client sends them.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    thumbnail: Optional[str] = Field(None, min_length=1)
    background_image: Optional[str] = None
    short_description: Optional[str] = Field(None, min_length=1, max_length=1000)
    game_url: Optional[str] = Field(None, min_length=1)
    genre: Optional[list[str]] = None
    platform: Optional[list[str]] = None
    publisher: Optional[str] = None
    developer: Optional[str] = None
    release_date: Optional[date] = None

    @field_validator("genre", "platform", mode="before")
    @classmethod
    def split_arrays(cls, value):
        return _split_list(value)


class GameQuery(BaseModel):
    """
    Validated catalog query.

    Unknown keys are ignored, page and page size are clamped rather than
    rejected, and an unrecognized ``sort_by`` falls back to relevance.
    """

    search: Optional[str] = None
    genre: Optional[str] = None
    platform: Optional[str] = None
    tag: Optional[str] = None
    min_rating: Optional[float] = Field(None, ge=0, le=5)
    max_rating: Optional[float] = Field(None, ge=0, le=5)
    sort_by: SortOption = SortOption.RELEVANCE
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    advanced: bool = False

    model_config = {"extra": "ignore"}

    @field_validator("search", "genre", "platform", "tag", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("sort_by", mode="before")
    @classmethod
    def default_sort(cls, value):
        try:
            return SortOption(value)
        except ValueError:
            return SortOption.RELEVANCE

    @field_validator("page", mode="before")
    @classmethod
    def clamp_page_number(cls, value):
        return clamp_page(int(value) if value is not None else None)

    @field_validator("page_size", mode="before")
    @classmethod
    def clamp_size(cls, value):
        return clamp_page_size(int(value) if value is not None else None)

    @property
    def tags(self) -> list[str]:
        """Tag terms split on ``.`` or ``,`` with blanks dropped."""
        if not self.tag:
            return []
        terms = self.tag.replace(",", ".").split(".")
        return [term.strip() for term in terms if term.strip()]


class AppliedFilters(BaseModel):
    """Echo of the filters a listing was computed with."""

    search: Optional[str] = None
    genre: Optional[str] = None
    platform: Optional[str] = None
    tag: Optional[str] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
    sort_by: SortOption

    @classmethod
    def from_query(cls, query: GameQuery) -> "AppliedFilters":
        return cls(
            search=query.search,
            genre=query.genre,
            platform=query.platform,
            tag=query.tag,
            min_rating=query.min_rating,
            max_rating=query.max_rating,
            sort_by=query.sort_by,
        )


class GameListResponse(BaseModel):
    games: list[Game]
    pagination: PaginationMeta
    filters: AppliedFilters


class FilterOption(BaseModel):
    name: str
    display_name: str


class TagCount(BaseModel):
    tag: str
    count: int


class SortOptionInfo(BaseModel):
    value: SortOption
    label: str


class FilterMetadata(BaseModel):
    """Everything a client needs to render catalog filter controls."""

    genres: list[FilterOption]
    platforms: list[FilterOption]
    popular_tags: list[TagCount]
    sort_options: list[SortOptionInfo]


class GenreStat(BaseModel):
    genre: str
    count: int
    average_rating: float


class GameStats(BaseModel):
    """Catalog-wide statistics."""

    total_games: int
    total_users: int
    total_reviews: int
    total_favorites: int
    top_rated_games: list[Game]
    recent_games: list[Game]
    genre_stats: list[GenreStat]


class SyncResult(BaseModel):
    """Outcome of one catalog ingestion run."""

    total_processed: int = 0
    new_games: int = 0
    updated_games: int = 0
    errors: list[str] = Field(default_factory=list)
