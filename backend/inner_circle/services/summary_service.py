"""Dashboards computed on every call straight from the document store.

Nothing here is cached: each method re-runs its counts and aggregation
pipelines, so results are point-in-time snapshots.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

from pymongo.collection import Collection

from ..db import DocumentStore
from ..errors import NotFoundError
from ..repositories.lessons import PUBLIC, LessonRepository
from ..repositories.reports import ReportRepository

TOP_CONTRIBUTORS = 3
RECENT_LESSONS = 3


def _month_label(key: dict[str, Any]) -> str:
    return f"{int(key['year']):04d}-{int(key['month']):02d}"


def local_midnight(now: datetime | None = None) -> datetime:
    current = (now or datetime.now()).astimezone()
    return current.replace(hour=0, minute=0, second=0, microsecond=0)


def monthly_series(collection: Collection) -> list[dict[str, Any]]:
    """Count documents per calendar month of ``createdAt``, oldest month first."""
    pipeline = [
        {"$match": {"createdAt": {"$exists": True, "$ne": None}}},
        {
            "$group": {
                "_id": {"year": {"$year": "$createdAt"}, "month": {"$month": "$createdAt"}},
                "count": {"$sum": 1},
            }
        },
        {"$sort": {"_id.year": 1, "_id.month": 1}},
    ]
    return [
        {"month": _month_label(row["_id"]), "count": row["count"]}
        for row in collection.aggregate(pipeline)
    ]


class SummaryService:
    def __init__(
        self,
        store: DocumentStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.users = store.users
        self.lessons = store.lessons
        self.lesson_repo = LessonRepository(store)
        self.report_repo = ReportRepository(store)
        self._clock = clock or datetime.now

    def user_summary(self, email: str) -> dict[str, Any]:
        if not self.users.find_one({"email": email}, {"_id": 1}):
            raise NotFoundError("User not found")
        return {
            "totalLessons": self.lessons.count_documents({"creatorEmail": email}),
            "totalFavorites": self.lessons.count_documents({"favorites": email}),
            "recentLessons": self.lesson_repo.recent_for_creator(email, limit=RECENT_LESSONS),
        }

    def user_analytics(self, email: str) -> list[dict[str, Any]]:
        pipeline = [
            {"$match": {"creatorEmail": email, "createdAt": {"$exists": True, "$ne": None}}},
            {
                "$group": {
                    "_id": {
                        "year": {"$year": "$createdAt"},
                        "month": {"$month": "$createdAt"},
                        "category": "$category",
                        "tone": "$tone",
                    },
                    "count": {"$sum": 1},
                }
            },
            {"$sort": {"_id.year": 1, "_id.month": 1}},
        ]
        return [
            {
                "month": _month_label(row["_id"]),
                "category": row["_id"].get("category"),
                "tone": row["_id"].get("tone"),
                "count": row["count"],
            }
            for row in self.lessons.aggregate(pipeline)
        ]

    def top_contributors(self, limit: int = TOP_CONTRIBUTORS) -> list[dict[str, Any]]:
        pipeline = [
            {"$match": {"creatorEmail": {"$exists": True, "$ne": None}}},
            {
                "$group": {
                    "_id": "$creatorEmail",
                    "name": {"$first": "$creatorName"},
                    "photo": {"$first": "$creatorPhoto"},
                    "lessonCount": {"$sum": 1},
                }
            },
            {"$sort": {"lessonCount": -1}},
            {"$limit": limit},
        ]
        return [
            {
                "email": row["_id"],
                "name": row.get("name"),
                "photo": row.get("photo"),
                "lessonCount": row["lessonCount"],
            }
            for row in self.lessons.aggregate(pipeline)
        ]

    def admin_summary(self) -> dict[str, Any]:
        # The bound goes out as naive UTC; BSON encodes naive datetimes as UTC.
        midnight = local_midnight(self._clock()).astimezone(timezone.utc).replace(tzinfo=None)
        return {
            "totalUsers": self.users.count_documents({}),
            "totalPublicLessons": self.lessons.count_documents({"privacy": PUBLIC}),
            "totalReports": self.report_repo.count(),
            "topContributors": self.top_contributors(),
            "todayLessons": self.lessons.count_documents({"createdAt": {"$gte": midnight}}),
            "lessonsPerMonth": monthly_series(self.lessons),
            "usersPerMonth": monthly_series(self.users),
        }


__all__ = ["SummaryService", "local_midnight", "monthly_series"]
