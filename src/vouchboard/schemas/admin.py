"""Admin dashboard schemas."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Counters shown on the admin dashboard."""

    total_users: int
    new_users_today: int
    active_users: int
    total_posts: int
    new_posts_today: int
    total_categories: int
    total_replies: int
