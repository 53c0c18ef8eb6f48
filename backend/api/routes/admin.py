"""
Admin endpoints.

Catalog management, catalog ingestion, rating reconciliation and review
moderation require admin; user management requires superadmin.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from shared.models import AuthenticatedUser, DEFAULT_PAGE_SIZE, Role
from modules.games.interfaces import IGameService
from modules.games.models import (
    Game,
    GameCreate,
    GameListResponse,
    GameQuery,
    GameUpdate,
    SyncResult,
)
from modules.games.sync import CatalogSyncService
from modules.reviews.aggregator import RatingAggregator
from modules.reviews.interfaces import IReviewService
from modules.reviews.models import ReconcileResult, ReviewListResponse
from modules.users.interfaces import IUserService
from modules.users.models import UpdateRoleRequest, UserListResponse, UserProfileResponse
from ..dependencies import (
    get_catalog_sync_service,
    get_game_service,
    get_rating_aggregator,
    get_review_service,
    get_user_service,
)
from ..middleware.auth import require_admin, require_superadmin

logger = logging.getLogger(__name__)

router = APIRouter()


# -----------------------------------------------------------------------------
# Catalog management
# -----------------------------------------------------------------------------


@router.get("/games", response_model=GameListResponse)
async def admin_list_games(
    search: Optional[str] = Query(default=None),
    sort_by: str = Query(default="relevance"),
    page: int = Query(default=1),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE),
    admin: AuthenticatedUser = Depends(require_admin),
    service: IGameService = Depends(get_game_service),
) -> GameListResponse:
    query = GameQuery(
        search=search,
        sort_by=sort_by,
        page=page,
        page_size=page_size,
        advanced=True,
    )
    return await service.list_games(query)


@router.post("/games", response_model=Game, status_code=201)
async def admin_create_game(
    request: GameCreate,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IGameService = Depends(get_game_service),
) -> Game:
    """Add a game. Its rating starts at 0 with 0 reviews."""
    return await service.create_game(request)


@router.post("/games/sync", response_model=SyncResult)
async def admin_sync_catalog(
    admin: AuthenticatedUser = Depends(require_admin),
    sync: CatalogSyncService = Depends(get_catalog_sync_service),
) -> SyncResult:
    """Pull the external catalog now. Local ratings are preserved."""
    logger.info(f"Catalog sync triggered by {admin.id}")
    return await sync.sync()


@router.put("/games/{game_id}", response_model=Game)
async def admin_update_game(
    game_id: UUID,
    request: GameUpdate,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IGameService = Depends(get_game_service),
) -> Game:
    """Edit catalog fields. Rating aggregates cannot be set here."""
    return await service.update_game(str(game_id), request)


@router.delete("/games/{game_id}", status_code=204)
async def admin_delete_game(
    game_id: UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IGameService = Depends(get_game_service),
) -> None:
    """Delete a game together with its reviews and favorites."""
    await service.delete_game(str(game_id))


@router.post("/ratings/reconcile", response_model=ReconcileResult)
async def admin_reconcile_ratings(
    admin: AuthenticatedUser = Depends(require_admin),
    aggregator: RatingAggregator = Depends(get_rating_aggregator),
) -> ReconcileResult:
    """Recompute every game's rating and fix the ones that drifted."""
    return await aggregator.reconcile_all()


# -----------------------------------------------------------------------------
# Review moderation
# -----------------------------------------------------------------------------


@router.get("/reviews", response_model=ReviewListResponse)
async def admin_list_reviews(
    page: int = Query(default=1),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE),
    game_id: Optional[UUID] = Query(default=None),
    admin: AuthenticatedUser = Depends(require_admin),
    service: IReviewService = Depends(get_review_service),
) -> ReviewListResponse:
    return await service.list_all(page, page_size, game_id=str(game_id) if game_id else None)


@router.delete("/reviews/{review_id}", status_code=204)
async def admin_delete_review(
    review_id: UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IReviewService = Depends(get_review_service),
) -> None:
    await service.delete(str(review_id), admin)


# -----------------------------------------------------------------------------
# User management
# -----------------------------------------------------------------------------


@router.get("/users", response_model=UserListResponse)
async def admin_list_users(
    page: int = Query(default=1),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE),
    search: Optional[str] = Query(default=None),
    role: Optional[Role] = Query(default=None),
    admin: AuthenticatedUser = Depends(require_superadmin),
    service: IUserService = Depends(get_user_service),
) -> UserListResponse:
    return await service.list_users(page, page_size, search=search, role=role)


@router.put("/users/{user_id}/role", response_model=UserProfileResponse)
async def admin_update_role(
    user_id: UUID,
    request: UpdateRoleRequest,
    admin: AuthenticatedUser = Depends(require_superadmin),
    service: IUserService = Depends(get_user_service),
) -> UserProfileResponse:
    """Change a user's role. A superadmin cannot demote themselves."""
    user = await service.update_role(admin.id, str(user_id), request.role)
    return UserProfileResponse.from_user(user)
