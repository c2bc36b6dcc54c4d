"""
Pydantic schemas for user-related requests and responses.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from userhub.features.groups.schemas import GroupResponse


class UserCreate(BaseModel):
    """
    Schema for creating a new user.

    Email presence is checked by the service so a blank address yields the
    same "Email is required" error through every entry point.
    """
    email: Optional[str] = Field(None, max_length=255)
    group_ids: Optional[List[str]] = Field(None, description="Groups to join; unknown or deleted ids are ignored")


class UserUpdate(BaseModel):
    """
    Schema for editing a user. Omitted (or null) fields are left unchanged.

    An empty group_ids list removes every membership; a blank email is
    ignored.
    """
    email: Optional[str] = Field(None, max_length=255)
    group_ids: Optional[List[str]] = None
    active: Optional[bool] = None


class UserResponse(BaseModel):
    """Schema for user responses."""
    id: str
    email: str
    active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    groups: List[GroupResponse] = []

    model_config = ConfigDict(from_attributes=True)
