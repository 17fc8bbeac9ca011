# src/vouchboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .admin import DashboardStats
from .category import CategoryCreate, CategoryResponse, CategoryUpdate
from .post import (
    LikesResponse,
    PostCreate,
    PostResponse,
    PostSummary,
    PostUpdate,
    RepliesResponse,
    ReplyCreate,
    ReplyResponse,
)
from .user import (
    AuthResponse,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    ReputationResponse,
    RoleUpdateRequest,
    UserPrivate,
    UserPublic,
    VouchResponse,
    VouchSummary,
)

__all__ = [
    "DashboardStats",
    "CategoryCreate", "CategoryResponse", "CategoryUpdate",
    "LikesResponse", "PostCreate", "PostResponse", "PostSummary", "PostUpdate",
    "RepliesResponse", "ReplyCreate", "ReplyResponse",
    "AuthResponse", "LoginRequest", "ProfileUpdateRequest", "RegisterRequest",
    "ReputationResponse", "RoleUpdateRequest", "UserPrivate", "UserPublic",
    "VouchResponse", "VouchSummary",
]
