"""
Default users, groups and permissions.

Used by ``scripts/seed_data.py`` and, when SEED_ON_STARTUP=1, by the app at
startup. Seeding is skipped entirely once any group exists.
"""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.features.groups.models import Group, grants
from userhub.features.permissions.models import Permission
from userhub.features.users.models import User, memberships
from userhub.utils import get_logger


log = get_logger(__name__)


DEFAULT_PERMISSIONS = ["ManageUsers", "ReadReports", "WriteReports"]

# group name -> permission names
DEFAULT_GROUPS = {
    "Admin": ["ManageUsers", "ReadReports", "WriteReports"],
    "Level 1": ["ReadReports"],
    "Level 2": ["ReadReports", "WriteReports"],
}

# user email -> group names
DEFAULT_USERS = {
    "admin@example.com": ["Admin"],
    "user1@example.com": ["Admin", "Level 1"],
    "user2@example.com": ["Level 2"],
}


async def seed_defaults(db: AsyncSession) -> bool:
    """
    Insert the default data set.

    Returns False without touching anything when groups already exist.
    """
    existing = await db.execute(select(func.count()).select_from(Group))
    if existing.scalar_one():
        log.info("Groups already present, skipping seed")
        return False

    permissions = {name: Permission(name=name) for name in DEFAULT_PERMISSIONS}
    groups = {name: Group(name=name) for name in DEFAULT_GROUPS}
    users = {email: User(email=email) for email in DEFAULT_USERS}
    db.add_all([*permissions.values(), *groups.values(), *users.values()])
    await db.flush()

    for group_name, permission_names in DEFAULT_GROUPS.items():
        await grants.add_many(db, groups[group_name].id, [permissions[p].id for p in permission_names])
        log.info(f"Created group '{group_name}' with {len(permission_names)} permissions")

    for email, group_names in DEFAULT_USERS.items():
        await memberships.add_many(db, users[email].id, [groups[g].id for g in group_names])
        log.info(f"Created user '{email}' in {len(group_names)} group(s)")

    await db.flush()
    log.info(f"Seeded {len(permissions)} permissions, {len(groups)} groups, {len(users)} users")
    return True
