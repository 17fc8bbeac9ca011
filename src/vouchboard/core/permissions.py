"""Role model and permission evaluation.

Roles form a closed set. Every guarded action is a ``Permission`` and the
mapping below is the single source of truth for which roles hold it.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from vouchboard.core.errors import PermissionDeniedError

if TYPE_CHECKING:
    from vouchboard.models import Post, User


class Role(str, Enum):
    """User roles, lowest privilege first."""

    USER = "user"
    TRUSTED = "trusted"
    MODERATOR = "moderator"
    ADMIN = "admin"
    OWNER = "owner"


class Permission(str, Enum):
    """Actions guarded by role."""

    ACCESS_ADMIN = "access_admin"
    MANAGE_CATEGORIES = "manage_categories"
    MANAGE_USERS = "manage_users"
    MODERATE_POSTS = "moderate_posts"


ADMIN_ROLES = frozenset({Role.ADMIN, Role.OWNER})
MODERATOR_ROLES = frozenset({Role.MODERATOR, Role.ADMIN, Role.OWNER})

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.USER: frozenset(),
    Role.TRUSTED: frozenset(),
    Role.MODERATOR: frozenset({Permission.MODERATE_POSTS}),
    Role.ADMIN: frozenset(Permission),
    Role.OWNER: frozenset(Permission),
}


def role_in(role: Role | str, allowed: Iterable[Role]) -> bool:
    """Return True if ``role`` is one of ``allowed``.

    Unknown role strings are never allowed.
    """
    try:
        resolved = Role(role)
    except ValueError:
        return False
    return resolved in frozenset(allowed)


def has_permission(role: Role | str, permission: Permission) -> bool:
    """Return True if ``role`` holds ``permission``."""
    try:
        resolved = Role(role)
    except ValueError:
        return False
    return permission in ROLE_PERMISSIONS[resolved]


def require_permission(principal: User, permission: Permission) -> None:
    """Raise ``PermissionDeniedError`` unless the principal holds ``permission``."""
    if not has_permission(principal.role, permission):
        raise PermissionDeniedError("Not authorized to access this route")


def can_modify_post(principal: User, post: Post) -> bool:
    """Return True if the principal authored the post or may moderate posts."""
    if post.author_id == principal.id:
        return True
    return has_permission(principal.role, Permission.MODERATE_POSTS)


def ensure_can_modify_post(principal: User, post: Post, action: str) -> None:
    """Raise ``PermissionDeniedError`` unless ``can_modify_post`` holds.

    Args:
        principal: Authenticated user attempting the mutation.
        post: Target post.
        action: Verb used in the error message, e.g. ``"update"``.
    """
    if not can_modify_post(principal, post):
        raise PermissionDeniedError(f"Not authorized to {action} this post")
