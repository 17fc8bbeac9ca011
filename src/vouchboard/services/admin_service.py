"""Queries and mutations behind the admin dashboard."""
from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from vouchboard.core.errors import BadRequestError, PermissionDeniedError
from vouchboard.core.permissions import Permission, Role, require_permission
from vouchboard.db.time import utcnow
from vouchboard.models import Category, Post, Reply, User
from vouchboard.schemas.admin import DashboardStats

from .user_service import get_user_or_404

__all__ = ["dashboard_stats", "list_users", "set_role", "set_active", "list_all_posts"]

logger = logging.getLogger(__name__)

ACTIVE_WINDOW = timedelta(hours=24)


def _count(db: Session, model: type, *criteria: object) -> int:
    return int(db.query(func.count()).select_from(model).filter(*criteria).scalar() or 0)


def dashboard_stats(db: Session) -> DashboardStats:
    """Return user, post, category and reply counters.

    "Today" starts at midnight UTC; "active" means seen in the last 24 hours.
    """
    now = utcnow()
    today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return DashboardStats(
        total_users=_count(db, User),
        new_users_today=_count(db, User, User.created_at >= today_start),
        active_users=_count(db, User, User.last_active >= now - ACTIVE_WINDOW),
        total_posts=_count(db, Post),
        new_posts_today=_count(db, Post, Post.created_at >= today_start),
        total_categories=_count(db, Category),
        total_replies=_count(db, Reply),
    )


def list_users(db: Session, *, q: str | None = None, role: Role | None = None) -> list[User]:
    """Return users newest first, optionally filtered by substring and role."""
    query = db.query(User)
    if q:
        pattern = f"%{q}%"
        query = query.filter(or_(User.username.ilike(pattern), User.email.ilike(pattern)))
    if role is not None:
        query = query.filter(User.role == role)
    return query.order_by(User.created_at.desc(), User.id.desc()).all()


def set_role(db: Session, principal: User, user_id: int, role: Role) -> User:
    """Change a user's role.

    Raises:
        NotFoundError: If the user does not exist.
        PermissionDeniedError: If the principal may not manage users, or a
            non-owner grants or revokes the owner role.
    """
    require_permission(principal, Permission.MANAGE_USERS)
    user = get_user_or_404(db, user_id)
    touches_owner = Role.OWNER in (role, user.role)
    if touches_owner and principal.role != Role.OWNER:
        raise PermissionDeniedError("Only an owner can grant or revoke the owner role")

    previous = user.role
    user.role = role
    db.commit()
    db.refresh(user)
    logger.info("User %s changed role of %s from %s to %s", principal.id, user.id, previous.value, role.value)
    return user


def set_active(db: Session, principal: User, user_id: int, *, active: bool) -> User:
    """Ban (``active=False``) or unban a user.

    Raises:
        NotFoundError: If the user does not exist.
        PermissionDeniedError: If the principal may not manage users.
        BadRequestError: If the principal tries to ban themselves.
    """
    require_permission(principal, Permission.MANAGE_USERS)
    user = get_user_or_404(db, user_id)
    if not active and user.id == principal.id:
        raise BadRequestError("You cannot ban yourself")

    user.is_active = active
    db.commit()
    db.refresh(user)
    logger.info("User %s %s user %s", principal.id, "unbanned" if active else "banned", user.id)
    return user


def list_all_posts(db: Session) -> list[Post]:
    """Return every post newest first."""
    return db.query(Post).order_by(Post.created_at.desc(), Post.id.desc()).all()
