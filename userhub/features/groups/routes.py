"""
Group feature routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.core.database.engine import get_db
from userhub.features.groups import service
from userhub.features.groups.schemas import AddPermissionRequest, GroupDetailResponse, GroupResponse
from userhub.features.permissions.schemas import PermissionResponse


router = APIRouter(tags=["groups"])


@router.get("", response_model=list[GroupResponse])
async def list_groups(
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """List non-deleted groups."""
    return await service.list_groups(db)


# Declared before /{group_id} so "permissions" is not taken for an id
@router.get("/permissions", response_model=list[PermissionResponse])
async def list_permissions(
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """List every non-deleted permission, ordered by name."""
    return await service.list_permissions(db)


@router.get("/{group_id}", response_model=GroupDetailResponse)
async def get_group(
    group_id: str,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Get a group with its permissions and members."""
    group = await service.get_group_detail(db, group_id)
    return GroupDetailResponse.from_group(group)


@router.get("/{group_id}/available-permissions", response_model=list[PermissionResponse])
async def list_available_permissions(
    group_id: str,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """List permissions that can still be granted to the group."""
    return await service.list_available_permissions(db, group_id)


@router.post("/{group_id}/permissions", response_model=GroupDetailResponse)
async def add_permission(
    group_id: str,
    request: AddPermissionRequest,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Grant a permission to a group."""
    group = await service.add_permission(db, group_id, request.permission_id)
    return GroupDetailResponse.from_group(group)


@router.delete("/{group_id}/permissions/{permission_id}", response_model=GroupDetailResponse)
async def remove_permission(
    group_id: str,
    permission_id: str,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Revoke a permission from a group."""
    group = await service.remove_permission(db, group_id, permission_id)
    return GroupDetailResponse.from_group(group)
