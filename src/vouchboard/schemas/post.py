"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PostSort = Literal["latest", "popular", "price-low", "price-high", "relevance"]


def _clean_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    cleaned: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


class PostCreate(BaseModel):
    """Schema for creating a new listing."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=20000)
    category_id: int = Field(..., description="Category the listing belongs to")
    tags: list[str] = Field(default_factory=list, max_length=20)
    price: float = Field(0.0, ge=0, description="Ignored when is_free is true")
    is_free: bool = False

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """Strip tags, drop blanks and duplicates."""
        return _clean_tags(v) or []


class PostUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = Field(None, min_length=1, max_length=20000)
    category_id: int | None = None
    tags: list[str] | None = Field(None, max_length=20)
    price: float | None = Field(None, ge=0)
    is_free: bool | None = None
    is_sold: bool | None = None
    is_pinned: bool | None = None

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        """Strip tags, drop blanks and duplicates."""
        return _clean_tags(v)


class ReplyCreate(BaseModel):
    """Schema for replying to a post."""

    content: str = Field(..., min_length=1, max_length=5000)


class AuthorSummary(BaseModel):
    """Minimal user fields embedded in posts and replies."""

    id: int
    username: str
    avatar: str

    model_config = ConfigDict(from_attributes=True)


class CategorySummary(BaseModel):
    """Minimal category fields embedded in posts."""

    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class ReplyResponse(BaseModel):
    """Reply as returned by the API."""

    id: int
    user: AuthorSummary
    content: str
    likes: list[int]
    created_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _flatten_likes(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            extracted["likes"] = list(data.like_user_ids)  # type: ignore[attr-defined]
            data = extracted
        return data

    model_config = ConfigDict(from_attributes=True)


class PostSummary(BaseModel):
    """Listing fields returned by list endpoints."""

    id: int
    title: str
    content: str
    author: AuthorSummary
    category: CategorySummary | None
    tags: list[str]
    price: float
    is_free: bool
    likes: list[int]
    reply_count: int
    views: int
    is_sold: bool
    is_pinned: bool
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _flatten_relationships(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            extracted["likes"] = list(data.like_user_ids)  # type: ignore[attr-defined]
            extracted["reply_count"] = len(data.replies)  # type: ignore[attr-defined]
            data = extracted
        return data

    model_config = ConfigDict(from_attributes=True)


class PostResponse(PostSummary):
    """Full post including its replies."""

    replies: list[ReplyResponse]


class LikesResponse(BaseModel):
    """Resulting like set after a toggle."""

    likes: list[int]


class RepliesResponse(BaseModel):
    """Ordered replies after adding one."""

    replies: list[ReplyResponse]
