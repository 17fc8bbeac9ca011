"""Admin endpoints; every route requires the admin or owner role."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from vouchboard.api.v1.dependencies import AdminUserDep, SessionDep, require_permission
from vouchboard.core.permissions import Permission, Role
from vouchboard.models import Category, Post, User
from vouchboard.schemas.admin import DashboardStats
from vouchboard.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from vouchboard.schemas.post import PostSummary
from vouchboard.schemas.user import RoleUpdateRequest, UserPrivate
from vouchboard.services import admin_service, category_service

# Router-wide guard; category writes additionally require MANAGE_CATEGORIES.
router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_permission(Permission.ACCESS_ADMIN))],
)

manage_categories = [Depends(require_permission(Permission.MANAGE_CATEGORIES))]


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(db: SessionDep) -> DashboardStats:
    """Return dashboard counters."""
    return admin_service.dashboard_stats(db)


@router.get("/users", response_model=list[UserPrivate])
async def list_users(
    db: SessionDep,
    q: str | None = Query(None, description="Substring of username or email"),
    role: Role | None = Query(None, description="Only users with this role"),
) -> list[User]:
    """List users newest first."""
    return admin_service.list_users(db, q=q, role=role)


@router.put("/users/{user_id}/role", response_model=UserPrivate)
async def update_user_role(
    user_id: int,
    payload: RoleUpdateRequest,
    current_user: AdminUserDep,
    db: SessionDep,
) -> User:
    """Change a user's role."""
    return admin_service.set_role(db, current_user, user_id, payload.role)


@router.put("/users/{user_id}/ban", response_model=UserPrivate)
async def ban_user(user_id: int, current_user: AdminUserDep, db: SessionDep) -> User:
    """Deactivate a user account."""
    return admin_service.set_active(db, current_user, user_id, active=False)


@router.put("/users/{user_id}/unban", response_model=UserPrivate)
async def unban_user(user_id: int, current_user: AdminUserDep, db: SessionDep) -> User:
    """Reactivate a user account."""
    return admin_service.set_active(db, current_user, user_id, active=True)


@router.get("/posts", response_model=list[PostSummary])
async def list_posts(db: SessionDep) -> list[Post]:
    """List every post newest first."""
    return admin_service.list_all_posts(db)


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(db: SessionDep) -> list[Category]:
    """List all categories, including inactive ones."""
    return category_service.list_categories(db, include_inactive=True)


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=manage_categories,
)
async def create_category(payload: CategoryCreate, db: SessionDep) -> Category:
    """Create a category."""
    return category_service.create_category(db, payload)


@router.put(
    "/categories/{category_id}",
    response_model=CategoryResponse,
    dependencies=manage_categories,
)
async def update_category(category_id: int, payload: CategoryUpdate, db: SessionDep) -> Category:
    """Update a category."""
    return category_service.update_category(db, category_id, payload)


@router.delete("/categories/{category_id}", dependencies=manage_categories)
async def delete_category(category_id: int, db: SessionDep) -> dict[str, str]:
    """Delete a category; its posts are left without a category."""
    category_service.delete_category(db, category_id)
    return {"detail": "Category deleted"}
