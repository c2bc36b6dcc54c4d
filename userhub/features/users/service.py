"""
User lifecycle operations.

Every function works inside the caller's session and only flushes; the
request-scoped session from ``get_db`` commits or rolls back the unit of work.
"""
from collections.abc import Sequence
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.core.database.base import utcnow
from userhub.core.errors import ConflictError, NotFoundError, ValidationError
from userhub.features.groups.models import Group
from userhub.features.users.models import User, memberships
from userhub.utils import get_logger


log = get_logger(__name__)


async def _get_live_user(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(
        select(User).where(User.id == user_id, User.deleted.is_(False))
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError(f"User with ID {user_id} not found or has been deleted")
    return user


async def _email_taken(db: AsyncSession, email: str, exclude_user_id: Optional[str] = None) -> bool:
    stmt = select(User.id).where(User.email == email, User.deleted.is_(False))
    if exclude_user_id is not None:
        stmt = stmt.where(User.id != exclude_user_id)
    result = await db.execute(stmt.limit(1))
    return result.first() is not None


async def _live_group_ids(db: AsyncSession, group_ids: Optional[Sequence[str]]) -> list[str]:
    """Subset of ``group_ids`` that name existing, non-deleted groups."""
    if not group_ids:
        return []
    result = await db.execute(
        select(Group.id)
        .where(Group.id.in_(set(group_ids)), Group.deleted.is_(False))
        .order_by(Group.id)
    )
    return list(result.scalars().all())


async def _reload_groups(db: AsyncSession, user: User) -> None:
    await db.flush()
    await db.refresh(user, attribute_names=["groups"])


async def list_users(db: AsyncSession) -> list[User]:
    """All non-deleted users with their groups."""
    result = await db.execute(
        select(User).where(User.deleted.is_(False)).order_by(User.id)
    )
    return list(result.scalars().all())


async def get_user(db: AsyncSession, user_id: str) -> User:
    """A non-deleted user with its groups."""
    return await _get_live_user(db, user_id)


async def create_user(
    db: AsyncSession,
    email: Optional[str],
    group_ids: Optional[Sequence[str]] = None,
) -> User:
    """
    Create an active user and join it to the valid subset of ``group_ids``.

    Raises:
        ValidationError: email is missing or blank
        ConflictError: a non-deleted user already has this email
    """
    if email is None or not email.strip():
        raise ValidationError("Email is required")

    if await _email_taken(db, email):
        log.info("Rejected duplicate email %r", email)
        raise ConflictError(f"User with email '{email}' already exists")

    user = User(
        email=email,
        active=True,
        deleted=False,
        created_at=utcnow(),
    )
    db.add(user)
    await db.flush()

    joined = await memberships.add_many(db, user.id, await _live_group_ids(db, group_ids))
    await _reload_groups(db, user)

    log.info("Created user %s (%s) in %d group(s)", user.id, email, len(joined))
    return user


async def edit_user(
    db: AsyncSession,
    user_id: str,
    email: Optional[str] = None,
    group_ids: Optional[Sequence[str]] = None,
    active: Optional[bool] = None,
) -> User:
    """
    Apply a partial update to a live user.

    ``None`` leaves a field untouched and a blank email counts as no change.
    ``group_ids`` replaces the whole membership set; an empty list clears it.
    updated_at is stamped on every accepted call.

    Raises:
        NotFoundError: the user does not exist or is deleted
        ConflictError: another non-deleted user owns ``email``
    """
    user = await _get_live_user(db, user_id)

    if email is not None and email.strip():
        if await _email_taken(db, email, exclude_user_id=user.id):
            log.info("Rejected email change for user %s: %r in use", user.id, email)
            raise ConflictError(f"Email '{email}' is already in use")
        user.email = email

    if active is not None:
        user.active = active

    if group_ids is not None:
        await memberships.replace(db, user.id, await _live_group_ids(db, group_ids))

    user.updated_at = utcnow()
    await _reload_groups(db, user)

    log.info("Edited user %s", user.id)
    return user


async def delete_user(db: AsyncSession, user_id: str) -> User:
    """
    Soft-delete a user: deleted=True, active=False. The row is kept.

    Raises:
        NotFoundError: the user does not exist or is already deleted
    """
    user = await _get_live_user(db, user_id)

    user.deleted = True
    user.active = False
    user.updated_at = utcnow()
    await db.flush()

    log.info("Deleted user %s", user.id)
    return user
