"""
Users module interface.

Other modules should depend on IUserService, not the concrete implementation.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import Role
from .models import ProviderProfile, User, UserListResponse


@runtime_checkable
class IUserService(Protocol):
    """
    Interface for identity operations.
    """

    async def upsert_from_provider(self, profile: ProviderProfile) -> User:
        """
        Create or refresh an identity after a successful provider login.

        Args:
            profile: Identity data from the external provider

        Returns:
            The stored identity
        """
        ...

    async def get_user(self, user_id: str) -> User:
        """
        Get an identity by ID.

        Raises:
            UserNotFoundError: If the identity does not exist
        """
        ...

    async def update_profile(
        self,
        user_id: str,
        name: str,
        username: Optional[str] = None,
    ) -> User:
        """
        Update display name and, optionally, the unique handle.

        Raises:
            InvalidProfileError: If a field is malformed
            UsernameTakenError: If the handle belongs to someone else
            UserNotFoundError: If the identity does not exist
        """
        ...

    async def check_username_availability(self, username: str) -> bool:
        """Case-insensitive check that no identity uses ``username``."""
        ...

    async def set_avatar(
        self,
        user_id: str,
        avatar_url: str,
        public_id: Optional[str] = None,
    ) -> User:
        """Point the identity at a newly stored avatar."""
        ...

    async def clear_avatar(self, user_id: str) -> User:
        """Remove the identity's uploaded avatar reference."""
        ...

    async def delete_account(self, user_id: str) -> None:
        """
        Delete the identity, its reviews and favorites.

        Ratings of every game the identity reviewed are recomputed
        before this returns.
        """
        ...

    async def list_users(
        self,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> UserListResponse:
        """Paginated identity listing for superadmins."""
        ...

    async def update_role(self, actor_id: str, user_id: str, role: Role) -> User:
        """Change an identity's role."""
        ...
