import pytest

from .utils import create_lesson, unique_email

pytestmark = pytest.mark.anyio


async def test_register_then_duplicate(async_client, store):
    email = unique_email()

    first = await async_client.post("/users", json={"email": email, "displayName": "First"})
    assert first.status_code == 201, first.text
    body = first.json()
    assert body["created"] is True
    assert body["insertedId"] == body["user"]["_id"]
    assert body["user"]["role"] == "user"
    assert body["user"]["isPremium"] is False

    second = await async_client.post("/users", json={"email": email, "displayName": "Second"})
    assert second.status_code == 200, second.text
    repeat = second.json()
    assert repeat["created"] is False
    assert repeat["message"] == "user already exists"
    assert repeat["insertedId"] is None
    assert repeat["user"]["displayName"] == "First"
    assert store.users.count_documents({"email": email}) == 1


async def test_get_user_and_role(async_client):
    email = unique_email()
    await async_client.post("/users", json={"email": email})

    resp = await async_client.get(f"/users/{email}")
    assert resp.status_code == 200
    assert resp.json()["email"] == email

    role = await async_client.get(f"/users/{email}/role")
    assert role.json() == {"role": "user"}


async def test_unknown_user(async_client):
    resp = await async_client.get("/users/ghost@example.com")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "User not found"

    role = await async_client.get("/users/ghost@example.com/role")
    assert role.status_code == 200
    assert role.json() == {"role": "user"}


async def test_update_profile(async_client):
    email = unique_email()
    await async_client.post("/users", json={"email": email, "photoURL": "old.png"})

    resp = await async_client.patch(f"/users/{email}/profile", json={"displayName": "Renamed"})

    assert resp.status_code == 200, resp.text
    assert resp.json()["displayName"] == "Renamed"
    assert resp.json()["photoURL"] == "old.png"


async def test_admin_role_change_and_listing(async_client):
    email = unique_email("admin")
    created = (await async_client.post("/users", json={"email": email})).json()
    await create_lesson(async_client, creatorEmail=email)

    resp = await async_client.patch(
        f"/admin/users/{created['insertedId']}/role", json={"role": "admin"}
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["role"] == "admin"

    listing = await async_client.get("/admin/users")
    assert listing.status_code == 200
    rows = {row["email"]: row for row in listing.json()}
    assert rows[email]["totalLessons"] == 1
    assert rows[email]["role"] == "admin"


async def test_role_change_bad_id(async_client):
    resp = await async_client.patch("/admin/users/not-an-id/role", json={"role": "admin"})
    assert resp.status_code == 400
