"""Category reference data helpers."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vouchboard.core.errors import ConflictError, NotFoundError
from vouchboard.models import Category, Post
from vouchboard.schemas.category import CategoryCreate, CategoryUpdate

__all__ = [
    "list_categories",
    "get_category_by_slug",
    "get_category_or_404",
    "create_category",
    "update_category",
    "delete_category",
]

logger = logging.getLogger(__name__)


def list_categories(db: Session, *, include_inactive: bool = False) -> list[Category]:
    """Return categories ordered for display."""
    query = db.query(Category)
    if not include_inactive:
        query = query.filter(Category.is_active.is_(True))
    return query.order_by(Category.order, Category.name).all()


def get_category_by_slug(db: Session, slug: str) -> Category:
    """Return an active category by slug or raise ``NotFoundError``."""
    category = (
        db.query(Category)
        .filter(Category.slug == slug, Category.is_active.is_(True))
        .first()
    )
    if category is None:
        raise NotFoundError("Category not found")
    return category


def get_category_or_404(db: Session, category_id: int) -> Category:
    """Return a category by id, active or not."""
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def _ensure_slug_free(db: Session, slug: str, *, exclude_id: int | None = None) -> None:
    query = db.query(Category).filter(Category.slug == slug)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    if query.first() is not None:
        raise ConflictError("Category slug already exists")


def _commit_or_conflict(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Category slug already exists") from err


def create_category(db: Session, payload: CategoryCreate) -> Category:
    """Create a category, rejecting duplicate slugs."""
    _ensure_slug_free(db, payload.slug)
    category = Category(**payload.model_dump())
    db.add(category)
    _commit_or_conflict(db)
    db.refresh(category)
    logger.info("Created category %s (id=%s)", category.slug, category.id)
    return category


def update_category(db: Session, category_id: int, update: CategoryUpdate) -> Category:
    """Apply the provided fields to a category."""
    category = get_category_or_404(db, category_id)
    fields = update.model_dump(exclude_unset=True)
    # Only description and icon may be cleared.
    fields = {
        key: value
        for key, value in fields.items()
        if value is not None or key in {"description", "icon"}
    }
    if "slug" in fields:
        _ensure_slug_free(db, fields["slug"], exclude_id=category.id)

    for key, value in fields.items():
        setattr(category, key, value)
    _commit_or_conflict(db)
    db.refresh(category)
    logger.info("Updated category %s (id=%s)", category.slug, category.id)
    return category


def delete_category(db: Session, category_id: int) -> None:
    """Delete a category and detach its posts in the same transaction."""
    category = get_category_or_404(db, category_id)
    detached = (
        db.query(Post)
        .filter(Post.category_id == category.id)
        .update({Post.category_id: None}, synchronize_session="fetch")
    )
    db.delete(category)
    db.commit()
    logger.info("Deleted category %s; detached %d posts", category_id, detached)
