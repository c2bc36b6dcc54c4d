"""
Pydantic schemas for user statistics.
"""
from typing import Dict
from pydantic import BaseModel


class UserStatisticsResponse(BaseModel):
    """Aggregate user counts."""
    total_users: int
    active_users: int
    inactive_users: int
    deleted_users: int
    users_per_group: Dict[str, int] = {}
