"""
Favorite API endpoints.

All endpoints act on the current user's favorites.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_favorite_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser, DEFAULT_PAGE_SIZE

from .interfaces import IFavoriteService
from .models import (
    Favorite,
    FavoriteIdsResponse,
    FavoriteListResponse,
    FavoriteQuery,
    FavoriteStatus,
)

router = APIRouter()


@router.get("", response_model=FavoriteListResponse)
async def list_favorites(
    genre: Optional[str] = Query(default=None),
    platform: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    sort_by: str = Query(
        default="added_at",
        description="added_at, title, rating or release-date",
    ),
    page: int = Query(default=1),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFavoriteService = Depends(get_favorite_service),
) -> FavoriteListResponse:
    """List the current user's favorite games."""
    query = FavoriteQuery(
        genre=genre,
        platform=platform,
        search=search,
        sort_by=sort_by,
        page=page,
        page_size=page_size,
    )
    return await service.list_favorites(user.id, query)


@router.get("/ids", response_model=FavoriteIdsResponse)
async def list_favorite_ids(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFavoriteService = Depends(get_favorite_service),
) -> FavoriteIdsResponse:
    """IDs of the current user's favorite games."""
    return FavoriteIdsResponse(game_ids=await service.favorite_game_ids(user.id))


@router.get("/{game_id}/status", response_model=FavoriteStatus)
async def get_favorite_status(
    game_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFavoriteService = Depends(get_favorite_service),
) -> FavoriteStatus:
    return await service.status(user.id, str(game_id))


@router.post("/{game_id}", response_model=Favorite, status_code=201)
async def add_favorite(
    game_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFavoriteService = Depends(get_favorite_service),
) -> Favorite:
    """Add a game to the current user's favorites."""
    return await service.add(user.id, str(game_id))


@router.delete("/{game_id}", status_code=204)
async def remove_favorite(
    game_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFavoriteService = Depends(get_favorite_service),
) -> None:
    """Remove a game from the current user's favorites."""
    await service.remove(user.id, str(game_id))
