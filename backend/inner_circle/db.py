from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.server_api import ServerApi

from .config import Settings, settings
from .errors import InvalidIdError

logger = logging.getLogger(__name__)

USERS = "users"
LESSONS = "lessons"
LESSON_REPORTS = "lesson_reports"


class DocumentStore:
    """Thin typed handle over the three collections the service reads and writes.

    The store is built once by the application lifespan and handed to every
    repository; nothing in the package keeps a module level client.
    """

    def __init__(self, client: MongoClient, db_name: str) -> None:
        self.client = client
        self.db: Database = client[db_name]

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "DocumentStore":
        client: MongoClient = MongoClient(
            config.mongodb_url,
            tz_aware=True,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
        )
        return cls(client, config.mongodb_db_name)

    @property
    def users(self) -> Collection:
        return self.db[USERS]

    @property
    def lessons(self) -> Collection:
        return self.db[LESSONS]

    @property
    def lesson_reports(self) -> Collection:
        return self.db[LESSON_REPORTS]

    def ping(self) -> None:
        self.client.admin.command("ping")

    def ensure_indexes(self) -> None:
        self.users.create_index([("email", ASCENDING)], unique=True, name="users_email_unique")
        self.lessons.create_index([("creatorEmail", ASCENDING)], name="lessons_creator")
        self.lessons.create_index([("createdAt", DESCENDING)], name="lessons_created_at")
        self.lesson_reports.create_index([("lessonId", ASCENDING)], name="reports_lesson")
        logger.info("Document store indexes ensured", extra={"database": self.db.name})

    def close(self) -> None:
        self.client.close()


def to_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError) as exc:
        raise InvalidIdError(value) from exc


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(value: datetime) -> datetime:
    # Mongo hands back naive UTC unless the client is tz aware.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def serialize_document(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return as_aware(value)
    if isinstance(value, Mapping):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(item) for item in value]
    return value


__all__ = [
    "DocumentStore",
    "LESSONS",
    "LESSON_REPORTS",
    "USERS",
    "as_aware",
    "serialize_document",
    "to_object_id",
    "utcnow",
]
