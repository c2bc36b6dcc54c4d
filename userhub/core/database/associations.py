"""
Explicit many-to-many edge sets.

Membership (user -> group) and grant (group -> permission) edges are stored in
two-column join tables whose composite primary key makes each (left, right)
pair unique. Services mutate edges only through ``Association`` so the ORM
relationships on the models stay read-only views.
"""
from collections.abc import Iterable
from sqlalchemy import Table, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession


class Association:
    """
    A set of (left_id, right_id) pairs backed by a join table.

    Usage:
        memberships = Association(user_groups, "user_id", "group_id")
        await memberships.add(db, user.id, group.id)
        group_ids = await memberships.targets(db, user.id)
    """

    def __init__(self, table: Table, left: str, right: str):
        self.table = table
        self.left = table.c[left]
        self.right = table.c[right]

    def __repr__(self) -> str:
        return f"<Association({self.table.name}: {self.left.name} -> {self.right.name})>"

    async def contains(self, db: AsyncSession, left_id: str, right_id: str) -> bool:
        result = await db.execute(
            select(self.left).where(self.left == left_id, self.right == right_id)
        )
        return result.first() is not None

    async def targets(self, db: AsyncSession, left_id: str) -> list[str]:
        """Right-hand ids linked to ``left_id``."""
        result = await db.execute(select(self.right).where(self.left == left_id))
        return list(result.scalars().all())

    async def add(self, db: AsyncSession, left_id: str, right_id: str) -> bool:
        """Insert the pair. Returns False when it already exists."""
        if await self.contains(db, left_id, right_id):
            return False
        await db.execute(
            insert(self.table).values({self.left.name: left_id, self.right.name: right_id})
        )
        return True

    async def add_many(self, db: AsyncSession, left_id: str, right_ids: Iterable[str]) -> list[str]:
        """Insert every missing pair; returns the right ids actually added."""
        existing = set(await self.targets(db, left_id))
        added = []
        for right_id in right_ids:
            if right_id in existing:
                continue
            existing.add(right_id)
            added.append(right_id)
        if added:
            await db.execute(
                insert(self.table),
                [{self.left.name: left_id, self.right.name: right_id} for right_id in added],
            )
        return added

    async def remove(self, db: AsyncSession, left_id: str, right_id: str) -> bool:
        """Delete the pair. Returns False when it was not present."""
        result = await db.execute(
            delete(self.table).where(self.left == left_id, self.right == right_id)
        )
        return result.rowcount > 0

    async def clear(self, db: AsyncSession, left_id: str) -> int:
        """Delete every pair for ``left_id``; returns how many were removed."""
        result = await db.execute(delete(self.table).where(self.left == left_id))
        return result.rowcount

    async def replace(self, db: AsyncSession, left_id: str, right_ids: Iterable[str]) -> list[str]:
        """Make ``right_ids`` the complete set for ``left_id`` (clear, then add)."""
        await self.clear(db, left_id)
        return await self.add_many(db, left_id, right_ids)
