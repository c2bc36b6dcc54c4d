"""
Read-only user counts.

Deleted users never count toward a group or a total except
``total_user_count_including_deleted``. Deleted groups are left out of the
per-group maps; live groups without members report 0.
"""
from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.core.errors import NotFoundError
from userhub.features.groups.models import Group
from userhub.features.statistics.schemas import UserStatisticsResponse
from userhub.features.users.models import User, user_groups


async def total_user_count(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(User).where(User.deleted.is_(False))
    )
    return result.scalar_one()


async def total_user_count_including_deleted(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(User))
    return result.scalar_one()


async def active_user_count(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(User)
        .where(User.active.is_(True), User.deleted.is_(False))
    )
    return result.scalar_one()


def _per_group_counts():
    # Outer joins keep empty groups; count(User.id) skips the NULL rows
    return (
        select(Group.id, Group.name, func.count(User.id))
        .select_from(Group)
        .outerjoin(user_groups, user_groups.c.group_id == Group.id)
        .outerjoin(User, and_(User.id == user_groups.c.user_id, User.deleted.is_(False)))
        .where(Group.deleted.is_(False))
        .group_by(Group.id, Group.name)
        .order_by(Group.name, Group.id)
    )


async def user_count_per_group(db: AsyncSession) -> dict[str, int]:
    """Live user count keyed by group id."""
    result = await db.execute(_per_group_counts())
    return {group_id: count for group_id, _name, count in result.all()}


async def user_count_per_group_name(db: AsyncSession) -> dict[str, int]:
    """Live user count keyed by group name; groups sharing a name are summed."""
    result = await db.execute(_per_group_counts())
    counts: dict[str, int] = {}
    for _group_id, name, count in result.all():
        counts[name] = counts.get(name, 0) + count
    return counts


async def user_count_for_group(db: AsyncSession, group_id: str) -> int:
    """
    Live user count for one group.

    Raises:
        NotFoundError: the group is missing or deleted
    """
    result = await db.execute(_per_group_counts().where(Group.id == group_id))
    row = result.first()
    if row is None:
        raise NotFoundError(f"Group with ID {group_id} not found or has been deleted")
    return row[2]


async def user_statistics(db: AsyncSession) -> UserStatisticsResponse:
    total = await total_user_count(db)
    active = await active_user_count(db)
    including_deleted = await total_user_count_including_deleted(db)

    return UserStatisticsResponse(
        total_users=total,
        active_users=active,
        inactive_users=total - active,
        deleted_users=including_deleted - total,
        users_per_group=await user_count_per_group_name(db),
    )
