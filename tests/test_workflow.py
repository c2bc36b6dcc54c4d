"""End-to-end journeys through the HTTP API."""
import pytest


@pytest.fixture
async def levels(make_group):
    return {
        "a": await make_group("Level 1"),
        "b": await make_group("Level 2"),
        "c": await make_group("Admin"),
    }


@pytest.mark.asyncio
async def test_create_edit_delete_reflected_in_statistics(client, levels):
    before = (await client.get("/api/users/statistics")).json()

    created = await client.post(
        "/api/users",
        json={"email": "journey@example.com", "group_ids": [levels["a"].id, levels["b"].id]},
    )
    assert created.status_code == 201
    user = created.json()
    assert sorted(g["name"] for g in user["groups"]) == ["Level 1", "Level 2"]

    edited = await client.put(f"/api/users/{user['id']}", json={"group_ids": [levels["c"].id]})
    assert [g["name"] for g in edited.json()["groups"]] == ["Admin"]

    during = (await client.get("/api/users/statistics")).json()
    assert during["active_users"] == before["active_users"] + 1
    assert during["users_per_group"]["Admin"] == 1

    assert (await client.delete(f"/api/users/{user['id']}")).status_code == 204

    after = (await client.get("/api/users/statistics")).json()
    assert after["active_users"] == before["active_users"]
    assert after["total_users"] == before["total_users"]
    assert after["deleted_users"] == before["deleted_users"] + 1
    assert after["users_per_group"] == {"Admin": 0, "Level 1": 0, "Level 2": 0}


@pytest.mark.asyncio
async def test_promotion_through_levels(client, levels):
    user = (await client.post("/api/users", json={"email": "new@company.com", "group_ids": [levels["a"].id]})).json()

    promoted = (await client.put(f"/api/users/{user['id']}", json={"group_ids": [levels["b"].id]})).json()
    assert [g["name"] for g in promoted["groups"]] == ["Level 2"]

    admin = (await client.put(
        f"/api/users/{user['id']}",
        json={"group_ids": [levels["c"].id, levels["b"].id]},
    )).json()
    assert [g["name"] for g in admin["groups"]] == ["Admin", "Level 2"]

    stored = (await client.get(f"/api/users/{user['id']}")).json()
    assert stored["groups"] == admin["groups"]


@pytest.mark.asyncio
async def test_deactivate_then_reactivate(client):
    user = (await client.post("/api/users", json={"email": "employee@company.com"})).json()

    deactivated = (await client.put(f"/api/users/{user['id']}", json={"active": False})).json()
    assert deactivated["active"] is False
    assert (await client.get("/api/users/count/active")).json() == 0
    assert (await client.get("/api/users/count")).json() == 1

    reactivated = (await client.put(f"/api/users/{user['id']}", json={"active": True})).json()
    assert reactivated["active"] is True


@pytest.mark.asyncio
async def test_deleted_user_cannot_be_updated_and_email_is_freed(client):
    user = (await client.post("/api/users", json={"email": "leaver@company.com"})).json()
    assert (await client.delete(f"/api/users/{user['id']}")).status_code == 204

    update = await client.put(f"/api/users/{user['id']}", json={"active": True})
    assert update.status_code == 404

    rehired = await client.post("/api/users", json={"email": "leaver@company.com"})
    assert rehired.status_code == 201
    assert rehired.json()["id"] != user["id"]
