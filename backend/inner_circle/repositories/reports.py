from __future__ import annotations

import logging
from typing import Any

from .. import metrics
from ..db import DocumentStore, utcnow

logger = logging.getLogger(__name__)


class ReportRepository:
    def __init__(self, store: DocumentStore) -> None:
        self.collection = store.lesson_reports

    def file(
        self,
        lesson_id: str,
        reporter_email: str,
        reason: str,
        title: str | None = None,
        category: str | None = None,
    ) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "lessonId": lesson_id,
            "title": title,
            "reporterEmail": reporter_email,
            "reason": reason,
            "timestamp": utcnow(),
        }
        if category is not None:
            doc["category"] = category
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        metrics.lesson_reports_filed_total.inc()
        logger.info("Lesson reported", extra={"lesson_id": lesson_id, "report_id": result.inserted_id})
        return doc

    def list_grouped_by_lesson(self) -> list[dict[str, Any]]:
        pipeline = [
            {"$sort": {"timestamp": 1}},
            {
                "$group": {
                    "_id": "$lessonId",
                    "title": {"$first": "$title"},
                    "category": {"$first": "$category"},
                    "reports": {
                        "$push": {
                            "reason": "$reason",
                            "reporterEmail": "$reporterEmail",
                            "timestamp": "$timestamp",
                        }
                    },
                    "reportCount": {"$sum": 1},
                }
            },
            {"$sort": {"reportCount": -1}},
        ]
        grouped = []
        for row in self.collection.aggregate(pipeline):
            row["lessonId"] = row.pop("_id")
            grouped.append(row)
        return grouped

    def count(self) -> int:
        return self.collection.count_documents({})

    def clear_for_lesson(self, lesson_id: str) -> int:
        result = self.collection.delete_many({"lessonId": lesson_id})
        logger.info(
            "Lesson reports cleared",
            extra={"lesson_id": lesson_id, "deleted": result.deleted_count},
        )
        return result.deleted_count


__all__ = ["ReportRepository"]
