"""
Users service implementation.

Manages identity records created from provider logins, profile edits,
avatar references and account deletion.
"""

import logging
import re
from typing import Optional

from shared.exceptions import DuplicateRecordError
from shared.models import PaginationMeta, Role, clamp_page, clamp_page_size
from .exceptions import (
    InvalidProfileError,
    NoAvatarError,
    SelfDemotionError,
    UserNotFoundError,
    UsernameTakenError,
)
from .interfaces import IUserService
from .models import (
    NAME_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    USERNAME_PATTERN,
    ProviderProfile,
    User,
    UserListResponse,
    UserProfileResponse,
)
from .repository import UserRepository


logger = logging.getLogger(__name__)

_USERNAME_RE = re.compile(USERNAME_PATTERN)


def normalize_username(username: str) -> str:
    """
    Validate a handle and return its stored (lowercase) form.

    Raises:
        InvalidProfileError: If the handle is too short, too long or has
            characters other than letters, digits, ``_`` and ``-``
    """
    username = username.strip()
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise InvalidProfileError(
            "username",
            "Username must be between 3 and 20 characters",
        )
    if not _USERNAME_RE.match(username):
        raise InvalidProfileError(
            "username",
            "Username can only contain letters, numbers, underscores, and hyphens",
        )
    return username.lower()


class UserService(IUserService):
    """
    Identity service backed by UserRepository.

    Args:
        repository: Identity data access
        reviews: Review repository, used to find games touched by a deletion
        aggregator: Recomputes ratings of those games after a deletion
    """

    def __init__(
        self,
        repository: UserRepository,
        reviews=None,
        aggregator=None,
    ):
        self._repo = repository
        self._reviews = reviews
        self._aggregator = aggregator

    async def upsert_from_provider(self, profile: ProviderProfile) -> User:
        email = str(profile.email).lower()
        existing = await self._repo.get_by_provider_id(profile.provider_id)

        if existing is None:
            data = {
                "provider_id": profile.provider_id,
                "email": email,
                "name": profile.name.strip()[:NAME_MAX_LENGTH],
                "avatar_url": profile.avatar_url,
                "role": Role.USER.value,
            }
            try:
                user = await self._repo.create(data)
            except DuplicateRecordError:
                # Another login for the same provider ID won the insert
                user = await self._repo.get_by_provider_id(profile.provider_id)
                if user is None:
                    raise
                return user
            logger.info(f"Created user {user.id} from provider login")
            return user

        changes = {"email": email}
        if existing.avatar_public_id is None:
            changes["name"] = profile.name.strip()[:NAME_MAX_LENGTH]
            changes["avatar_url"] = profile.avatar_url
        updated = await self._repo.update(existing.id, changes)
        if updated is None:
            raise UserNotFoundError(existing.id)
        return updated

    async def get_user(self, user_id: str) -> User:
        user = await self._repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update_profile(
        self,
        user_id: str,
        name: str,
        username: Optional[str] = None,
    ) -> User:
        name = (name or "").strip()
        if not 1 <= len(name) <= NAME_MAX_LENGTH:
            raise InvalidProfileError("name", "Name must be between 1 and 50 characters")

        changes = {"name": name}
        if username is not None:
            username = normalize_username(username)
            holder = await self._repo.get_by_username(username)
            if holder is not None and holder.id != user_id:
                raise UsernameTakenError(username)
            changes["username"] = username

        try:
            user = await self._repo.update(user_id, changes)
        except DuplicateRecordError as exc:
            raise UsernameTakenError(username or "") from exc
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def check_username_availability(self, username: str) -> bool:
        username = normalize_username(username)
        return await self._repo.get_by_username(username) is None

    async def set_avatar(
        self,
        user_id: str,
        avatar_url: str,
        public_id: Optional[str] = None,
    ) -> User:
        user = await self._repo.update(
            user_id,
            {"avatar_url": avatar_url, "avatar_public_id": public_id},
        )
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def clear_avatar(self, user_id: str) -> User:
        user = await self.get_user(user_id)
        if not user.avatar_url:
            raise NoAvatarError()

        updated = await self._repo.update(
            user_id,
            {"avatar_url": None, "avatar_public_id": None},
        )
        if updated is None:
            raise UserNotFoundError(user_id)
        return updated

    async def delete_account(self, user_id: str) -> None:
        game_ids = []
        if self._reviews is not None:
            game_ids = await self._reviews.game_ids_for_user(user_id)

        if not await self._repo.delete(user_id):
            raise UserNotFoundError(user_id)
        logger.info(f"Deleted user {user_id} ({len(game_ids)} reviewed games)")

        if self._aggregator is not None and game_ids:
            await self._aggregator.recompute_many(game_ids)

    async def list_users(
        self,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> UserListResponse:
        page, page_size = clamp_page(page), clamp_page_size(page_size)
        users, total = await self._repo.list_users(page, page_size, search=search, role=role)
        return UserListResponse(
            users=[UserProfileResponse.from_user(u) for u in users],
            pagination=PaginationMeta.build(page, page_size, total),
        )

    async def update_role(self, actor_id: str, user_id: str, role: Role) -> User:
        if actor_id == user_id and role != Role.SUPERADMIN:
            raise SelfDemotionError()

        user = await self._repo.update(user_id, {"role": role.value})
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info(f"User {actor_id} set role of {user_id} to {role.value}")
        return user
