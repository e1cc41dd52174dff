import pytest

from .utils import create_lesson

pytestmark = pytest.mark.anyio


async def test_report_group_and_clear(async_client):
    busy = await create_lesson(async_client, title="Busy")
    calm = await create_lesson(async_client, title="Calm")
    for reporter in ("a@example.com", "b@example.com", "c@example.com"):
        resp = await async_client.post(
            f"/lessons/{busy['_id']}/reports",
            json={"reporterEmail": reporter, "reason": "misleading", "title": "Busy"},
        )
        assert resp.status_code == 201, resp.text
    await async_client.post(
        f"/lessons/{calm['_id']}/reports",
        json={"reporterEmail": "a@example.com", "reason": "spam", "title": "Calm"},
    )

    grouped = await async_client.get("/admin/reports")
    assert grouped.status_code == 200, grouped.text
    rows = grouped.json()
    assert [row["lessonId"] for row in rows] == [busy["_id"], calm["_id"]]
    assert [row["reportCount"] for row in rows] == [3, 1]
    assert rows[0]["reports"][0]["reason"] == "misleading"

    cleared = await async_client.delete(f"/admin/reports/{busy['_id']}")
    assert cleared.json() == {"deletedCount": 3}

    remaining = (await async_client.get("/admin/reports")).json()
    assert [row["lessonId"] for row in remaining] == [calm["_id"]]


async def test_deleting_lesson_keeps_reports(async_client):
    lesson = await create_lesson(async_client)
    await async_client.post(
        f"/lessons/{lesson['_id']}/reports",
        json={"reporterEmail": "a@example.com", "reason": "spam"},
    )

    await async_client.delete(f"/lessons/{lesson['_id']}")

    rows = (await async_client.get("/admin/reports")).json()
    assert rows[0]["lessonId"] == lesson["_id"]
