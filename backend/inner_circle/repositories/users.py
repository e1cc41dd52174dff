from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..db import DocumentStore, to_object_id, utcnow
from ..errors import NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"
PROFILE_FIELDS = ("displayName", "photoURL")


@dataclass
class RegistrationResult:
    created: bool
    user: dict[str, Any]
    message: str | None = None


class UserRepository:
    def __init__(self, store: DocumentStore) -> None:
        self.collection = store.users
        self.lessons = store.lessons

    def register(self, user: Mapping[str, Any]) -> RegistrationResult:
        """Insert a user once per email.

        A second registration for the same email returns the stored document
        instead of failing. The pre-check covers the common case; the unique
        index on ``email`` settles concurrent inserts.
        """
        email = user.get("email")
        existing = self.collection.find_one({"email": email})
        if existing:
            return RegistrationResult(created=False, user=existing, message="user already exists")

        doc = dict(user)
        doc["role"] = DEFAULT_ROLE
        doc["isPremium"] = False
        doc["createdAt"] = utcnow()
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            existing = self.collection.find_one({"email": email})
            return RegistrationResult(created=False, user=existing or doc, message="user already exists")
        doc["_id"] = result.inserted_id
        logger.info("User registered", extra={"user_id": result.inserted_id})
        return RegistrationResult(created=True, user=doc)

    def get_by_email(self, email: str) -> dict[str, Any]:
        user = self.collection.find_one({"email": email})
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_role(self, email: str) -> str:
        user = self.collection.find_one({"email": email}, {"role": 1})
        if not user:
            return DEFAULT_ROLE
        return user.get("role") or DEFAULT_ROLE

    def update_profile(self, email: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        changes = {key: fields[key] for key in PROFILE_FIELDS if key in fields}
        if not changes:
            return self.get_by_email(email)
        updated = self.collection.find_one_and_update(
            {"email": email},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFoundError("User not found")
        return updated

    def set_role(self, user_id: str, role: str) -> dict[str, Any]:
        return self._set(user_id, {"role": role})

    def set_premium(self, user_id: str, value: bool) -> dict[str, Any]:
        updated = self._set(user_id, {"isPremium": value})
        logger.info("Premium flag changed", extra={"user_id": user_id, "is_premium": value})
        return updated

    def list_all_with_lesson_counts(self) -> list[dict[str, Any]]:
        pipeline = [
            {"$group": {"_id": "$creatorEmail", "totalLessons": {"$sum": 1}}},
        ]
        counts = {row["_id"]: row["totalLessons"] for row in self.lessons.aggregate(pipeline)}
        users = []
        for user in self.collection.find({}):
            user["totalLessons"] = counts.get(user.get("email"), 0)
            users.append(user)
        return users

    def _set(self, user_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        updated = self.collection.find_one_and_update(
            {"_id": to_object_id(user_id)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFoundError("User not found")
        return updated


__all__ = ["DEFAULT_ROLE", "RegistrationResult", "UserRepository"]
