"""
Token endpoints.

The provider login flow itself is handled outside this API; it ends with
tokens issued by the auth service.
"""

from fastapi import APIRouter, Depends

from modules.auth.interfaces import IAuthService
from modules.auth.models import AccessTokenResponse, RefreshRequest
from ..dependencies import get_auth_service

router = APIRouter()


@router.post("/refresh", response_model=AccessTokenResponse)
async def refresh_token(
    request: RefreshRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> AccessTokenResponse:
    """Exchange a refresh token for a new access token."""
    return await auth.refresh(request.refresh_token)
