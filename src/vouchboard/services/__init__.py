# src/vouchboard/services/__init__.py
"""Business logic services for the Vouchboard application."""

from . import admin_service, category_service, post_service, social_service, user_service

__all__ = [
    "admin_service",
    "category_service",
    "post_service",
    "social_service",
    "user_service",
]
