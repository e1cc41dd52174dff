import uuid
from datetime import datetime, timezone


def unique_email(prefix: str = "member") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}@example.com"


def lesson_payload(**overrides):
    payload = {
        "title": "Letting go of perfect",
        "description": "What a failed launch taught me about shipping.",
        "category": "Career",
        "tone": "Reflective",
        "image": "https://img.example.com/lesson.png",
        "privacy": "Public",
        "accessLevel": "free",
        "creatorEmail": "author@example.com",
        "creatorName": "Author",
        "creatorPhoto": "https://img.example.com/author.png",
    }
    payload.update(overrides)
    return payload


def at(year: int, month: int, day: int = 1, hour: int = 12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


async def create_lesson(async_client, **overrides) -> dict:
    resp = await async_client.post("/lessons", json=lesson_payload(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()
