"""
Bearer token authentication dependencies.

Extracts the bearer token and resolves it through the auth service, so
every request sees the identity's current role.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser, Role
from modules.auth.interfaces import IAuthService
from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = credentials.credentials if credentials else None
    return await auth.authenticate(token)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    A missing, expired or invalid token yields None instead of an error.

    Usage:
        @router.get("/public")
        async def public_route(user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
            if user:
                return {"message": f"Hello, {user.name}"}
            return {"message": "Hello, anonymous"}
    """
    if credentials is None:
        return None

    try:
        return await auth.authenticate(credentials.credentials)
    except AuthenticationError:
        return None


def require_roles(*roles: Role):
    """
    Build a dependency that requires one of ``roles`` (or a higher role).

    Usage:
        @router.get("/admin-only")
        async def admin_route(user: AuthenticatedUser = Depends(require_roles(Role.ADMIN))):
            ...
    """

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
        auth: IAuthService = Depends(get_auth_service),
    ) -> AuthenticatedUser:
        auth.authorize_role(user, roles)
        return user

    return dependency


# Shortcuts for cleaner route definitions
require_admin = require_roles(Role.ADMIN)
require_superadmin = require_roles(Role.SUPERADMIN)
