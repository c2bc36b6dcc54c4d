"""
User feature routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.core.database.engine import get_db
from userhub.features.groups import service as group_service
from userhub.features.groups.schemas import GroupResponse
from userhub.features.users import service
from userhub.features.users.schemas import UserCreate, UserResponse, UserUpdate


router = APIRouter(tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """List all non-deleted users with their groups."""
    return await service.list_users(db)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Create a user; unknown or deleted group ids are ignored."""
    user = await service.create_user(db, user_data.email, user_data.group_ids)
    response.headers["Location"] = f"/api/users/{user.id}"
    return user


# Declared before /{user_id} so "groups" is not taken for an id
@router.get("/groups", response_model=list[GroupResponse])
async def list_groups(
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """List non-deleted groups a user can join."""
    return await group_service.list_groups(db)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Get a non-deleted user by ID."""
    return await service.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    update_data: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Edit email, active flag and/or group memberships."""
    return await service.edit_user(
        db,
        user_id,
        email=update_data.email,
        group_ids=update_data.group_ids,
        active=update_data.active,
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Soft-delete a user."""
    await service.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
