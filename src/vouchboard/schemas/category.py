"""Category-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def _check_slug(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip().lower()
    if not SLUG_PATTERN.match(v):
        raise ValueError("Slug must be lowercase words separated by hyphens")
    return v


class CategoryCreate(BaseModel):
    """Schema for creating a new category."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    icon: str | None = None
    is_active: bool = True
    order: int = 0

    @field_validator("slug")
    @classmethod
    def normalize_slug(cls, v: str | None) -> str | None:
        """Lowercase the slug and require hyphen-separated words."""
        return _check_slug(v)


class CategoryUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=100)
    slug: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    icon: str | None = None
    is_active: bool | None = None
    order: int | None = None

    @field_validator("slug")
    @classmethod
    def normalize_slug(cls, v: str | None) -> str | None:
        """Lowercase the slug and require hyphen-separated words."""
        return _check_slug(v)


class CategoryResponse(BaseModel):
    """Schema for category information returned by the API."""

    id: int
    name: str
    slug: str
    description: str | None
    icon: str | None
    is_active: bool
    order: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
