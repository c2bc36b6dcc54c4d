"""
User statistics routes, mounted under the users prefix.
"""
from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.core.database.engine import get_db
from userhub.features.statistics import service
from userhub.features.statistics.schemas import UserStatisticsResponse


router = APIRouter(tags=["statistics"])


@router.get("/count", response_model=int)
async def total_user_count(
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Count of non-deleted users."""
    return await service.total_user_count(db)


@router.get("/count/active", response_model=int)
async def active_user_count(
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Count of active, non-deleted users."""
    return await service.active_user_count(db)


@router.get("/count/per-group", response_model=dict[str, int])
async def user_count_per_group(
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Non-deleted user count keyed by group name."""
    return await service.user_count_per_group_name(db)


@router.get("/count/group/{group_id}", response_model=int)
async def user_count_for_group(
    group_id: str,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Non-deleted user count for one group."""
    return await service.user_count_for_group(db, group_id)


@router.get("/statistics", response_model=UserStatisticsResponse)
async def user_statistics(
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Totals, active/inactive/deleted split and users per group."""
    return await service.user_statistics(db)
