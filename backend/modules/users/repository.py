"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the ``users`` table.
"""

from datetime import datetime, timezone
from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.exceptions import DuplicateRecordError
from shared.models import Role
from shared.repository import (
    BaseRepository,
    constraint_name,
    escape_like,
    ilike_conditions,
    is_unique_violation,
)
from .models import User


class UserRepository(BaseRepository[User]):
    """
    Repository for identity records.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying roles and ownership.
    """

    TABLE = "users"

    async def get_by_id(self, user_id: str) -> Optional[User]:
        result = await self._db.table(self.TABLE).select("*").eq("id", user_id).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def get_by_provider_id(self, provider_id: str) -> Optional[User]:
        result = await (
            self._db.table(self.TABLE).select("*").eq("provider_id", provider_id).execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def get_by_username(self, username: str) -> Optional[User]:
        """Case-insensitive exact lookup of a handle."""
        result = await (
            self._db.table(self.TABLE)
            .select("*")
            .ilike("username", escape_like(username))
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def create(self, data: dict[str, Any]) -> User:
        """
        Insert a new identity.

        Raises:
            DuplicateRecordError: If provider ID, email or username is taken
        """
        try:
            result = await self._db.table(self.TABLE).insert(data).execute()
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateRecordError(self.TABLE, constraint_name(exc)) from exc
            raise
        return self._map_to_user(result.data[0])

    async def update(self, user_id: str, data: dict[str, Any]) -> Optional[User]:
        """
        Update an identity, stamping ``updated_at``.

        Returns:
            The updated identity, or None if it does not exist.

        Raises:
            DuplicateRecordError: If the new username or email is taken
        """
        data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        try:
            result = await self._db.table(self.TABLE).update(data).eq("id", user_id).execute()
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateRecordError(self.TABLE, constraint_name(exc)) from exc
            raise
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def delete(self, user_id: str) -> bool:
        """
        Delete an identity.

        Note: reviews and favorites are deleted via CASCADE.
        """
        result = await self._db.table(self.TABLE).delete().eq("id", user_id).execute()
        return bool(result.data)

    async def list_users(
        self,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> tuple[list[User], int]:
        """
        List identities newest first.

        Returns:
            Tuple of (page of users, total matching count)
        """
        offset = (page - 1) * page_size

        count_query = self._db.table(self.TABLE).select("id", count="exact", head=True)
        count_query = self._apply_filters(count_query, search, role)
        count_result = await count_query.execute()
        total = count_result.count or 0

        if offset >= total:
            return [], total

        query = self._db.table(self.TABLE).select("*")
        query = self._apply_filters(query, search, role)
        result = await (
            query.order("created_at", desc=True)
            .range(offset, offset + page_size - 1)
            .execute()
        )
        return [self._map_to_user(row) for row in result.data], total

    async def count(self) -> int:
        result = await self._db.table(self.TABLE).select("id", count="exact", head=True).execute()
        return result.count or 0

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _apply_filters(self, query, search: Optional[str], role: Optional[Role]):
        if search and search.strip():
            query = query.or_(ilike_conditions(["name", "email", "username"], search))
        if role is not None:
            query = query.eq("role", role.value)
        return query

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(data["id"]),
            provider_id=data["provider_id"],
            email=data["email"],
            name=data["name"],
            username=data.get("username"),
            role=Role(data.get("role") or Role.USER.value),
            avatar_url=data.get("avatar_url"),
            avatar_public_id=data.get("avatar_public_id"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
