# src/vouchboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    auth_router,
    categories_router,
    posts_router,
    users_router,
)

__all__ = [
    "auth_router",
    "posts_router",
    "categories_router",
    "users_router",
    "admin_router",
]
