"""
Tests for shared models.
"""

import pytest
from pydantic import ValidationError

from shared.models import (
    AuthenticatedUser,
    MAX_PAGE_SIZE,
    PaginationMeta,
    Role,
    clamp_page,
    clamp_page_size,
)


class TestRole:
    def test_ordering(self):
        assert Role.SUPERADMIN.at_least(Role.ADMIN)
        assert Role.ADMIN.at_least(Role.ADMIN)
        assert not Role.USER.at_least(Role.ADMIN)

    def test_values(self):
        assert [r.value for r in Role] == ["user", "admin", "superadmin"]


class TestAuthenticatedUser:
    """Tests for the AuthenticatedUser model in shared."""

    def test_default_role(self):
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        assert user.role == Role.USER
        assert user.is_moderator is False

    @pytest.mark.parametrize("role", [Role.ADMIN, Role.SUPERADMIN])
    def test_moderators(self, role):
        user = AuthenticatedUser(id="user-123", email="test@example.com", role=role)
        assert user.is_moderator is True

    def test_immutability(self):
        """Should be frozen/immutable."""
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        with pytest.raises(ValidationError):
            user.id = "new-id"

    def test_extra_fields_ignored(self):
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            extra_field="ignored",  # type: ignore
        )
        assert not hasattr(user, "extra_field")


class TestPagination:
    def test_middle_page(self):
        meta = PaginationMeta.build(page=2, page_size=20, total=45)
        assert meta.total_pages == 3
        assert meta.has_next_page is True
        assert meta.has_previous_page is True
        assert meta.offset == 20

    def test_last_page(self):
        meta = PaginationMeta.build(page=3, page_size=20, total=45)
        assert meta.has_next_page is False

    def test_empty(self):
        meta = PaginationMeta.build(page=1, page_size=20, total=0)
        assert meta.total_pages == 0
        assert meta.has_next_page is False
        assert meta.has_previous_page is False
        assert meta.is_out_of_range is True

    def test_page_past_end(self):
        meta = PaginationMeta.build(page=9, page_size=10, total=15)
        assert meta.is_out_of_range is True
        assert meta.has_next_page is False
        assert meta.has_previous_page is True

    @pytest.mark.parametrize("page, expected", [(None, 1), (0, 1), (-4, 1), (7, 7)])
    def test_clamp_page(self, page, expected):
        assert clamp_page(page) == expected

    @pytest.mark.parametrize(
        "size, expected",
        [(None, 20), (0, 1), (-5, 1), (50, 50), (1000, MAX_PAGE_SIZE)],
    )
    def test_clamp_page_size(self, size, expected):
        assert clamp_page_size(size) == expected
