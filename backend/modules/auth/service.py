"""
Authentication service implementation.

Issues and validates GameHub JWTs and answers role and ownership checks.
"""

from datetime import datetime, timezone, timedelta
from typing import Iterable, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings
from shared.models import AuthenticatedUser, Role
from modules.users.repository import UserRepository

from .interfaces import IAuthService
from .models import AccessTokenResponse, JWTPayload, TokenPair, TokenType
from .exceptions import (
    ExpiredTokenError,
    InsufficientPermissionsError,
    InvalidTokenError,
    MissingTokenError,
    OwnershipRequiredError,
    UserNotFoundError,
)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Tokens are HS256 JWTs whose ``sub`` is the identity ID and whose
    ``type`` claim separates access from refresh tokens. Every
    authentication re-reads the identity, so role changes and deleted
    accounts take effect immediately.
    """

    def __init__(self, users: UserRepository, settings: Settings):
        self._users = users
        self._settings = settings

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    async def authenticate(self, credential: Optional[str]) -> AuthenticatedUser:
        if not credential:
            raise MissingTokenError()

        payload = self._decode(credential, TokenType.ACCESS)
        user = await self._users.get_by_id(payload.sub)
        if user is None:
            raise UserNotFoundError(payload.sub)
        return user.to_authenticated()

    async def refresh(self, refresh_token: str) -> AccessTokenResponse:
        payload = self._decode(refresh_token, TokenType.REFRESH)
        if await self._users.get_by_id(payload.sub) is None:
            raise UserNotFoundError(payload.sub)

        return AccessTokenResponse(
            access_token=self._encode(payload.sub, TokenType.ACCESS),
            expires_in=self._settings.access_token_expire_minutes * 60,
        )

    def issue_tokens(self, user_id: str) -> TokenPair:
        return TokenPair(
            access_token=self._encode(user_id, TokenType.ACCESS),
            refresh_token=self._encode(user_id, TokenType.REFRESH),
            expires_in=self._settings.access_token_expire_minutes * 60,
        )

    # -------------------------------------------------------------------------
    # Authorization
    # -------------------------------------------------------------------------

    def authorize_role(self, user: AuthenticatedUser, allowed_roles: Iterable[Role]) -> None:
        allowed = list(allowed_roles)
        if not allowed or user.role in allowed:
            return
        lowest = min(allowed, key=lambda role: role.rank)
        if user.role.rank > lowest.rank:
            return
        raise InsufficientPermissionsError([r.value for r in allowed], user.role.value)

    def authorize_ownership(self, user: AuthenticatedUser, owner_id: str) -> None:
        if user.id != owner_id:
            raise OwnershipRequiredError(user.id, owner_id)

    def is_moderator(self, user: AuthenticatedUser) -> bool:
        return user.is_moderator

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _secret(self) -> str:
        if not self._settings.jwt_secret:
            raise InvalidTokenError("Server authentication not configured")
        return self._settings.jwt_secret

    def _encode(self, user_id: str, token_type: TokenType) -> str:
        minutes = (
            self._settings.access_token_expire_minutes
            if token_type == TokenType.ACCESS
            else self._settings.refresh_token_expire_minutes
        )
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "type": token_type.value,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=minutes)).timestamp()),
        }
        return jwt.encode(payload, self._secret(), algorithm=self._settings.jwt_algorithm)

    def _decode(self, token: str, expected: TokenType) -> JWTPayload:
        try:
            claims = jwt.decode(
                token,
                self._secret(),
                algorithms=[self._settings.jwt_algorithm],
            )
            payload = JWTPayload(**claims)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")
        except PydanticValidationError:
            raise InvalidTokenError("Token is missing required claims")

        if payload.type != expected:
            raise InvalidTokenError(f"Expected a {expected.value} token")
        return payload
