"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Iterable, Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser, Role
from .models import AccessTokenResponse, TokenPair


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication and authorization.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def authenticate(self, credential: Optional[str]) -> AuthenticatedUser:
        """
        Resolve a bearer credential to the identity it was issued for.

        Args:
            credential: Access token, or None when the request carried none

        Returns:
            AuthenticatedUser built from the current identity record

        Raises:
            MissingTokenError: If no credential was supplied
            ExpiredTokenError: If the token has expired
            InvalidTokenError: If the token is malformed or not an access token
            UserNotFoundError: If the identity no longer exists
        """
        ...

    def authorize_role(self, user: AuthenticatedUser, allowed_roles: Iterable[Role]) -> None:
        """
        Require one of ``allowed_roles`` or a role ranked above all of them.

        Raises:
            InsufficientPermissionsError: If the user's role is too low
        """
        ...

    def authorize_ownership(self, user: AuthenticatedUser, owner_id: str) -> None:
        """
        Require that ``user`` owns the resource.

        Raises:
            OwnershipRequiredError: If the user is not the owner
        """
        ...

    def is_moderator(self, user: AuthenticatedUser) -> bool:
        """True for admins and superadmins."""
        ...

    def issue_tokens(self, user_id: str) -> TokenPair:
        """Create an access and a refresh token for an identity."""
        ...

    async def refresh(self, refresh_token: str) -> AccessTokenResponse:
        """
        Exchange a refresh token for a new access token.

        Raises:
            ExpiredTokenError, InvalidTokenError, UserNotFoundError
        """
        ...
