"""
Catalog API endpoints.

Public read access to the game catalog. Admin catalog management lives in
api/routes/admin.py.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_game_service
from shared.models import DEFAULT_PAGE_SIZE

from .interfaces import IGameService
from .models import FilterMetadata, Game, GameListResponse, GameQuery, GameStats

router = APIRouter()


@router.get("", response_model=GameListResponse)
async def list_games(
    search: Optional[str] = Query(default=None, description="Substring of title or description"),
    genre: Optional[str] = Query(default=None, description="Genre substring"),
    platform: Optional[str] = Query(default=None, description="Platform substring"),
    tag: Optional[str] = Query(default=None, description="Tags separated by '.' or ','"),
    min_rating: Optional[float] = Query(default=None, ge=0, le=5),
    max_rating: Optional[float] = Query(default=None, ge=0, le=5),
    sort_by: str = Query(
        default="relevance",
        description="relevance, release-date, alphabetical or rating",
    ),
    page: int = Query(default=1, description="Page number (values below 1 mean 1)"),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, description="Items per page (1-100)"),
    advanced: bool = Query(default=False, description="Also search developer and publisher"),
    service: IGameService = Depends(get_game_service),
) -> GameListResponse:
    """
    Search, filter, sort and paginate the catalog.

    Out-of-range pages return an empty list with accurate pagination metadata.
    """
    query = GameQuery(
        search=search,
        genre=genre,
        platform=platform,
        tag=tag,
        min_rating=min_rating,
        max_rating=max_rating,
        sort_by=sort_by,
        page=page,
        page_size=page_size,
        advanced=advanced,
    )
    return await service.list_games(query)


@router.get("/filters/metadata", response_model=FilterMetadata)
async def get_filter_metadata(
    service: IGameService = Depends(get_game_service),
) -> FilterMetadata:
    """Genres, platforms, popular tags and sort options."""
    return await service.get_filter_metadata()


@router.get("/stats", response_model=GameStats)
async def get_game_stats(
    service: IGameService = Depends(get_game_service),
) -> GameStats:
    """Catalog statistics."""
    return await service.get_stats()


@router.get("/{game_id}", response_model=Game)
async def get_game(
    game_id: UUID,
    service: IGameService = Depends(get_game_service),
) -> Game:
    return await service.get_game(str(game_id))
