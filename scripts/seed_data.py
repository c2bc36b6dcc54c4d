"""
Seed script to populate default users, groups and permissions.

Run this script to create the tables (if missing) and insert:
- ManageUsers, ReadReports, WriteReports permissions
- Admin, Level 1, Level 2 groups with their permission grants
- admin@example.com, user1@example.com, user2@example.com with memberships

Usage:
    uv run python -m scripts.seed_data
"""
import asyncio

from userhub.core.database.engine import get_db, init_db
from userhub.seed import DEFAULT_GROUPS, seed_defaults
from userhub.utils import get_logger


log = get_logger(__name__)


async def main():
    """Main function to seed default data."""
    log.info("Starting seeding...")

    # Initialize database tables first
    log.info("Initializing database tables...")
    await init_db()

    # get_db commits when the generator is closed without error
    async for db in get_db():
        try:
            created = await seed_defaults(db)
        except Exception as e:
            log.error(f"Error seeding data: {e}", exc_info=True)
            await db.rollback()
            raise

        if created:
            log.info("Seeding completed successfully!")
            log.info("Default groups created:")
            for group_name, permission_names in DEFAULT_GROUPS.items():
                log.info(f"  - {group_name}: {', '.join(permission_names)}")


if __name__ == "__main__":
    asyncio.run(main())
