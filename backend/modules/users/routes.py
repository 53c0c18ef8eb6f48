"""
Profile API endpoints for the current user.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_user_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IUserService
from .models import (
    SetAvatarRequest,
    UpdateProfileRequest,
    UserProfileResponse,
    UsernameAvailability,
)

router = APIRouter()


@router.get("/me", response_model=UserProfileResponse)
async def get_my_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserProfileResponse:
    """Get the current user's profile."""
    return UserProfileResponse.from_user(await service.get_user(user.id))


@router.put("/me", response_model=UserProfileResponse)
async def update_my_profile(
    request: UpdateProfileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserProfileResponse:
    """Update display name and, optionally, username."""
    updated = await service.update_profile(user.id, request.name, request.username)
    return UserProfileResponse.from_user(updated)


@router.delete("/me", status_code=204)
async def delete_my_account(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> None:
    """
    Delete the current user's account.

    Reviews and favorites are removed with it, and the ratings of every
    game the user reviewed are recomputed before this responds.
    """
    await service.delete_account(user.id)


@router.get("/username/{username}/availability", response_model=UsernameAvailability)
async def check_username(
    username: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UsernameAvailability:
    available = await service.check_username_availability(username)
    return UsernameAvailability(
        username=username.lower(),
        available=available,
        message="Username is available" if available else "Username is already taken",
    )


@router.put("/me/avatar", response_model=UserProfileResponse)
async def set_my_avatar(
    request: SetAvatarRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserProfileResponse:
    """Point the profile at an avatar already stored in the object store."""
    updated = await service.set_avatar(user.id, request.avatar_url, request.public_id)
    return UserProfileResponse.from_user(updated)


@router.delete("/me/avatar", response_model=UserProfileResponse)
async def clear_my_avatar(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserProfileResponse:
    return UserProfileResponse.from_user(await service.clear_avatar(user.id))
