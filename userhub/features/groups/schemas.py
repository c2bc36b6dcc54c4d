"""
Pydantic schemas for groups and their permission grants.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from userhub.features.permissions.schemas import PermissionResponse


class GroupResponse(BaseModel):
    """Group summary (id and name)."""
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class GroupMember(BaseModel):
    """User as shown inside a group detail (without its own groups)."""
    id: str
    email: str
    active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class GroupDetailResponse(BaseModel):
    """Group with its live permissions and live members."""
    id: str
    name: str
    active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    permissions: List[PermissionResponse] = []
    users: List[GroupMember] = []

    @classmethod
    def from_group(cls, group) -> "GroupDetailResponse":
        return cls(
            id=group.id,
            name=group.name,
            active=group.active,
            created_at=group.created_at,
            updated_at=group.updated_at,
            permissions=[PermissionResponse.model_validate(p) for p in group.permissions if not p.deleted],
            users=[GroupMember.model_validate(u) for u in group.users if not u.deleted],
        )


class AddPermissionRequest(BaseModel):
    """Schema for granting a permission to a group."""
    permission_id: str = Field(..., min_length=1, description="Permission ID")
