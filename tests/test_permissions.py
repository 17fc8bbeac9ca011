# tests/test_permissions.py
"""Tests for role and permission evaluation."""

from types import SimpleNamespace

import pytest

from vouchboard.core.errors import PermissionDeniedError
from vouchboard.core.permissions import (
    ADMIN_ROLES,
    MODERATOR_ROLES,
    Permission,
    Role,
    can_modify_post,
    ensure_can_modify_post,
    has_permission,
    require_permission,
    role_in,
)


def _user(user_id: int, role: Role) -> SimpleNamespace:
    return SimpleNamespace(id=user_id, role=role)


def _post(author_id: int) -> SimpleNamespace:
    return SimpleNamespace(author_id=author_id)


@pytest.mark.parametrize("role", list(Role))
def test_admin_access_limited_to_admin_and_owner(role: Role) -> None:
    assert has_permission(role, Permission.ACCESS_ADMIN) is (role in {Role.ADMIN, Role.OWNER})


@pytest.mark.parametrize("role", list(Role))
def test_moderation_tier(role: Role) -> None:
    expected = role in {Role.MODERATOR, Role.ADMIN, Role.OWNER}
    assert has_permission(role, Permission.MODERATE_POSTS) is expected


def test_role_sets_match_permissions() -> None:
    assert ADMIN_ROLES == {Role.ADMIN, Role.OWNER}
    assert MODERATOR_ROLES == {Role.MODERATOR, Role.ADMIN, Role.OWNER}


def test_string_roles_are_resolved() -> None:
    assert has_permission("admin", Permission.MANAGE_CATEGORIES)
    assert role_in("moderator", MODERATOR_ROLES)
    assert not role_in("trusted", MODERATOR_ROLES)


def test_unknown_role_has_no_permissions() -> None:
    assert not has_permission("superuser", Permission.ACCESS_ADMIN)
    assert not role_in("superuser", ADMIN_ROLES)


def test_author_can_modify_own_post() -> None:
    assert can_modify_post(_user(1, Role.USER), _post(1))


def test_other_user_cannot_modify_post() -> None:
    assert not can_modify_post(_user(2, Role.TRUSTED), _post(1))
    with pytest.raises(PermissionDeniedError) as exc_info:
        ensure_can_modify_post(_user(2, Role.USER), _post(1), "delete")
    assert exc_info.value.status_code == 403
    assert "delete" in exc_info.value.detail


@pytest.mark.parametrize("role", [Role.MODERATOR, Role.ADMIN, Role.OWNER])
def test_moderators_can_modify_any_post(role: Role) -> None:
    assert can_modify_post(_user(2, role), _post(1))


def test_require_permission_raises_for_regular_user() -> None:
    with pytest.raises(PermissionDeniedError):
        require_permission(_user(1, Role.USER), Permission.MANAGE_USERS)
    require_permission(_user(1, Role.OWNER), Permission.MANAGE_USERS)
