from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from pymongo import DESCENDING, ReturnDocument

from .. import metrics
from ..db import DocumentStore, as_aware, to_object_id, utcnow
from ..errors import InvalidFieldError, NotFoundError

logger = logging.getLogger(__name__)

PUBLIC = "Public"
SORT_MOST_SAVED = "mostSaved"

UPDATABLE_FIELDS = (
    "title",
    "description",
    "category",
    "tone",
    "image",
    "privacy",
    "accessLevel",
)
PROTECTED_FIELDS = frozenset(
    {
        "_id",
        "likes",
        "likesCount",
        "favorites",
        "favoritesCount",
        "comments",
        "createdAt",
        "creatorEmail",
    }
)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class LessonFilter:
    search: str | None = None
    category: str | None = None
    tone: str | None = None
    sort: str | None = None


@dataclass(frozen=True)
class _Toggle:
    members: str
    counter: str
    kind: str


LIKE = _Toggle(members="likes", counter="likesCount", kind="like")
FAVORITE = _Toggle(members="favorites", counter="favoritesCount", kind="favorite")


def _created_at_key(lesson: Mapping[str, Any]) -> datetime:
    value = lesson.get("createdAt")
    if isinstance(value, datetime):
        return as_aware(value)
    return _EPOCH


def _favorites_key(lesson: Mapping[str, Any]) -> int:
    return int(lesson.get("favoritesCount") or 0)


class LessonRepository:
    def __init__(self, store: DocumentStore) -> None:
        self.collection = store.lessons

    def create(self, lesson: Mapping[str, Any]) -> dict[str, Any]:
        doc = dict(lesson)
        doc.pop("_id", None)
        doc["isFeatured"] = False
        doc["createdAt"] = utcnow()
        doc.setdefault("reviewed", False)
        # Engagement always starts empty; toggles and comments are the only writers.
        doc.update(likes=[], likesCount=0, favorites=[], favoritesCount=0, comments=[])
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        metrics.lessons_created_total.inc()
        logger.info(
            "Lesson created",
            extra={"lesson_id": result.inserted_id, "creator": doc.get("creatorEmail")},
        )
        return doc

    def list_public(self, lesson_filter: LessonFilter | None = None) -> list[dict[str, Any]]:
        lesson_filter = lesson_filter or LessonFilter()
        query: dict[str, Any] = {"privacy": PUBLIC}
        if lesson_filter.search:
            query["title"] = {"$regex": re.escape(lesson_filter.search), "$options": "i"}
        if lesson_filter.category:
            query["category"] = lesson_filter.category
        if lesson_filter.tone:
            query["tone"] = lesson_filter.tone

        lessons = list(self.collection.find(query))
        if lesson_filter.sort == SORT_MOST_SAVED:
            lessons.sort(key=_favorites_key, reverse=True)
        else:
            lessons.sort(key=_created_at_key, reverse=True)
        return lessons

    def list_mine(self, creator_email: str | None = None) -> list[dict[str, Any]]:
        query: dict[str, Any] = {}
        if creator_email:
            query["creatorEmail"] = creator_email
        lessons = list(self.collection.find(query))
        lessons.sort(key=_created_at_key, reverse=True)
        return lessons

    def get_by_id(self, lesson_id: str) -> dict[str, Any]:
        lesson = self.collection.find_one({"_id": to_object_id(lesson_id)})
        if not lesson:
            raise NotFoundError("Lesson not found")
        return lesson

    def update(self, lesson_id: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        changes = {key: fields.get(key) for key in UPDATABLE_FIELDS}
        changes["updatedAt"] = utcnow()
        return self._set(lesson_id, changes)

    def partial_update(self, lesson_id: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        for key, value in fields.items():
            if not key or key.startswith("$"):
                raise InvalidFieldError(key)
            # Dotted paths like ``likes.0`` address the protected field they start with.
            if key.split(".", 1)[0] in PROTECTED_FIELDS:
                continue
            changes[key] = value
        changes["updatedAt"] = utcnow()
        return self._set(lesson_id, changes)

    def delete(self, lesson_id: str) -> int:
        # Reports against the lesson are left in place.
        result = self.collection.delete_one({"_id": to_object_id(lesson_id)})
        if result.deleted_count:
            logger.info("Lesson deleted", extra={"lesson_id": lesson_id})
        return result.deleted_count

    def toggle_like(self, lesson_id: str, user_id: str) -> dict[str, Any]:
        return self._toggle(lesson_id, user_id, LIKE)

    def toggle_favorite(self, lesson_id: str, user_id: str) -> dict[str, Any]:
        return self._toggle(lesson_id, user_id, FAVORITE)

    def add_comment(self, lesson_id: str, comment: Mapping[str, Any]) -> dict[str, Any]:
        entry = {
            "userId": comment.get("userId"),
            "userName": comment.get("userName"),
            "userPhoto": comment.get("userPhoto"),
            "text": comment.get("text"),
            "time": utcnow(),
        }
        updated = self.collection.find_one_and_update(
            {"_id": to_object_id(lesson_id)},
            {"$push": {"comments": entry}},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFoundError("Lesson not found")
        return updated

    def list_related(self, lesson_id: str, limit: int = 6) -> list[dict[str, Any]]:
        lesson = self.get_by_id(lesson_id)
        query = {
            "_id": {"$ne": lesson["_id"]},
            "privacy": PUBLIC,
            "$or": [
                {"category": lesson.get("category")},
                {"tone": lesson.get("tone")},
            ],
        }
        return list(self.collection.find(query).limit(limit))

    def set_featured(self, lesson_id: str, value: bool) -> dict[str, Any]:
        return self._set(lesson_id, {"isFeatured": value})

    def set_reviewed(self, lesson_id: str) -> dict[str, Any]:
        return self._set(lesson_id, {"reviewed": True})

    def recent_for_creator(self, creator_email: str, limit: int = 3) -> list[dict[str, Any]]:
        cursor = (
            self.collection.find({"creatorEmail": creator_email})
            .sort("createdAt", DESCENDING)
            .limit(limit)
        )
        return list(cursor)

    def _set(self, lesson_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        updated = self.collection.find_one_and_update(
            {"_id": to_object_id(lesson_id)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFoundError("Lesson not found")
        return updated

    def _toggle(self, lesson_id: str, user_id: str, toggle: _Toggle) -> dict[str, Any]:
        oid = to_object_id(lesson_id)
        lesson = self.collection.find_one({"_id": oid}, {toggle.members: 1})
        if not lesson:
            raise NotFoundError("Lesson not found")

        # The membership guard in each filter keeps the counter in step with
        # the array when two identical toggles race.
        if user_id in (lesson.get(toggle.members) or []):
            direction = "remove"
            updated = self.collection.find_one_and_update(
                {"_id": oid, toggle.members: user_id},
                {"$pull": {toggle.members: user_id}, "$inc": {toggle.counter: -1}},
                return_document=ReturnDocument.AFTER,
            )
        else:
            direction = "add"
            updated = self.collection.find_one_and_update(
                {"_id": oid, toggle.members: {"$ne": user_id}},
                {"$addToSet": {toggle.members: user_id}, "$inc": {toggle.counter: 1}},
                return_document=ReturnDocument.AFTER,
            )

        if updated is None:
            # Lost the race to a concurrent toggle; report what is stored now.
            return self.get_by_id(lesson_id)
        metrics.lesson_toggles_total.labels(kind=toggle.kind, direction=direction).inc()
        return updated


__all__ = [
    "FAVORITE",
    "LIKE",
    "LessonFilter",
    "LessonRepository",
    "PROTECTED_FIELDS",
    "PUBLIC",
    "SORT_MOST_SAVED",
    "UPDATABLE_FIELDS",
]
