import pytest

from userhub.core.errors import NotFoundError
from userhub.features.statistics import service
from userhub.features.users import service as user_service


@pytest.fixture
async def population(make_group, make_user):
    admin = await make_group("Admin")
    level1 = await make_group("Level 1")
    empty = await make_group("Empty")
    retired = await make_group("Retired", deleted=True)

    await make_user("admin@example.com", groups=[admin])
    await make_user("user1@example.com", groups=[admin, level1])
    await make_user("idle@example.com", groups=[level1], active=False)
    await make_user("gone@example.com", groups=[admin, retired], active=False, deleted=True)
    return {"admin": admin, "level1": level1, "empty": empty, "retired": retired}


@pytest.mark.asyncio
async def test_totals(db, population):
    assert await service.total_user_count(db) == 3
    assert await service.total_user_count_including_deleted(db) == 4
    assert await service.active_user_count(db) == 2


@pytest.mark.asyncio
async def test_counts_with_no_users(db):
    assert await service.total_user_count(db) == 0
    assert await service.active_user_count(db) == 0
    assert await service.user_count_per_group(db) == {}


@pytest.mark.asyncio
async def test_per_group_counts_exclude_deleted_users_and_groups(db, population):
    by_id = await service.user_count_per_group(db)

    assert by_id == {
        population["admin"].id: 2,
        population["level1"].id: 2,
        population["empty"].id: 0,
    }


@pytest.mark.asyncio
async def test_per_group_counts_by_name(db, population):
    assert await service.user_count_per_group_name(db) == {"Admin": 2, "Level 1": 2, "Empty": 0}


@pytest.mark.asyncio
async def test_per_group_counts_sum_groups_sharing_a_name(db, make_group, make_user):
    first = await make_group("Team")
    second = await make_group("Team")
    await make_user("a@example.com", groups=[first])
    await make_user("b@example.com", groups=[second])

    assert await service.user_count_per_group_name(db) == {"Team": 2}


@pytest.mark.asyncio
async def test_count_for_one_group(db, population):
    assert await service.user_count_for_group(db, population["admin"].id) == 2
    assert await service.user_count_for_group(db, population["empty"].id) == 0

    with pytest.raises(NotFoundError):
        await service.user_count_for_group(db, population["retired"].id)
    with pytest.raises(NotFoundError):
        await service.user_count_for_group(db, "missing")


@pytest.mark.asyncio
async def test_user_statistics(db, population):
    stats = await service.user_statistics(db)

    assert stats.total_users == 3
    assert stats.active_users == 2
    assert stats.inactive_users == 1
    assert stats.deleted_users == 1
    assert stats.users_per_group == {"Admin": 2, "Level 1": 2, "Empty": 0}


@pytest.mark.asyncio
async def test_user_counted_once_per_group_it_belongs_to(db, make_group):
    a = await make_group("A")
    b = await make_group("B")

    await user_service.create_user(db, "both@example.com", [a.id, b.id])

    stats = await service.user_statistics(db)
    assert stats.total_users == 1
    assert stats.users_per_group == {"A": 1, "B": 1}
