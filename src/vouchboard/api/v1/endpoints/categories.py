"""Public category endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from vouchboard.api.v1.dependencies import SessionDep
from vouchboard.models import Category
from vouchboard.schemas.category import CategoryResponse
from vouchboard.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: SessionDep) -> list[Category]:
    """List active categories in display order."""
    return category_service.list_categories(db)


@router.get("/{slug}", response_model=CategoryResponse)
async def get_category(slug: str, db: SessionDep) -> Category:
    """Get an active category by its slug."""
    return category_service.get_category_by_slug(db, slug)
