"""
Group queries and permission grant management.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from userhub.core.database.base import utcnow
from userhub.core.errors import ConflictError, NotFoundError
from userhub.features.groups.models import Group, grants
from userhub.features.permissions.models import Permission
from userhub.utils import get_logger


log = get_logger(__name__)


async def _get_live_group(db: AsyncSession, group_id: str, with_details: bool = False) -> Group:
    stmt = select(Group).where(Group.id == group_id, Group.deleted.is_(False))
    if with_details:
        stmt = stmt.options(
            selectinload(Group.permissions),
            selectinload(Group.users),
        ).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    group = result.scalar_one_or_none()
    if group is None:
        raise NotFoundError(f"Group with ID {group_id} not found or has been deleted")
    return group


async def _get_live_permission(db: AsyncSession, permission_id: str) -> Permission:
    result = await db.execute(
        select(Permission).where(Permission.id == permission_id, Permission.deleted.is_(False))
    )
    permission = result.scalar_one_or_none()
    if permission is None:
        raise NotFoundError(f"Permission with ID {permission_id} not found or has been deleted")
    return permission


async def list_groups(db: AsyncSession) -> list[Group]:
    """Non-deleted groups ordered by name."""
    result = await db.execute(
        select(Group).where(Group.deleted.is_(False)).order_by(Group.name, Group.id)
    )
    return list(result.scalars().all())


async def get_group_detail(db: AsyncSession, group_id: str) -> Group:
    """A live group with its permissions and members loaded."""
    return await _get_live_group(db, group_id, with_details=True)


async def list_permissions(db: AsyncSession) -> list[Permission]:
    """Every non-deleted permission ordered by name."""
    result = await db.execute(
        select(Permission).where(Permission.deleted.is_(False)).order_by(Permission.name, Permission.id)
    )
    return list(result.scalars().all())


async def list_available_permissions(db: AsyncSession, group_id: str) -> list[Permission]:
    """Non-deleted permissions not yet granted to the group, ordered by name."""
    await _get_live_group(db, group_id)
    assigned = await grants.targets(db, group_id)
    result = await db.execute(
        select(Permission)
        .where(Permission.deleted.is_(False), Permission.id.not_in(assigned))
        .order_by(Permission.name, Permission.id)
    )
    return list(result.scalars().all())


async def add_permission(db: AsyncSession, group_id: str, permission_id: str) -> Group:
    """
    Grant a permission to a group.

    Raises:
        NotFoundError: group or permission missing or deleted
        ConflictError: the permission is already granted
    """
    group = await _get_live_group(db, group_id)
    permission = await _get_live_permission(db, permission_id)

    if not await grants.add(db, group.id, permission.id):
        raise ConflictError(f"Permission '{permission.name}' is already assigned to group '{group.name}'")

    group.updated_at = utcnow()
    await db.flush()

    log.info("Granted permission %s (%s) to group %s", permission.id, permission.name, group.id)
    return await get_group_detail(db, group.id)


async def remove_permission(db: AsyncSession, group_id: str, permission_id: str) -> Group:
    """
    Revoke a permission from a group.

    Raises:
        NotFoundError: group missing or deleted, or permission not granted to it
    """
    group = await _get_live_group(db, group_id)

    if not await grants.remove(db, group.id, permission_id):
        raise NotFoundError(f"Permission with ID {permission_id} is not assigned to this group")

    group.updated_at = utcnow()
    await db.flush()

    log.info("Revoked permission %s from group %s", permission_id, group.id)
    return await get_group_detail(db, group.id)
