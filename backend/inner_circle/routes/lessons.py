from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Query, status

from .. import schemas
from ..config import settings
from ..db import serialize_document
from ..dependencies import Lessons, Reports
from ..repositories import LessonFilter

router = APIRouter(tags=["lessons"])
admin_router = APIRouter(prefix="/admin/lessons", tags=["admin"])


def _many(docs: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [serialize_document(doc) for doc in docs]


@router.post("/lessons", status_code=status.HTTP_201_CREATED)
@router.post("/add-lessons", status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_lesson(payload: schemas.LessonCreate, lessons: Lessons):
    created = lessons.create(payload.model_dump(exclude_none=True))
    return serialize_document(created)


@router.get("/lessons/public")
def list_public_lessons(
    lessons: Lessons,
    search: Optional[str] = None,
    category: Optional[str] = None,
    tone: Optional[str] = None,
    sort: Optional[str] = None,
):
    lesson_filter = LessonFilter(search=search, category=category, tone=tone, sort=sort)
    return _many(lessons.list_public(lesson_filter))


@router.get("/lessons/mine")
def list_my_lessons(lessons: Lessons, email: Optional[str] = None):
    return _many(lessons.list_mine(email))


@router.get("/lessons/{lesson_id}")
def get_lesson(lesson_id: str, lessons: Lessons):
    return serialize_document(lessons.get_by_id(lesson_id))


@router.put("/lessons/{lesson_id}")
def replace_lesson(lesson_id: str, payload: schemas.LessonUpdate, lessons: Lessons):
    return serialize_document(lessons.update(lesson_id, payload.model_dump()))


@router.patch("/lessons/{lesson_id}")
def edit_lesson(lesson_id: str, payload: dict[str, Any], lessons: Lessons):
    return serialize_document(lessons.partial_update(lesson_id, payload))


@router.delete("/lessons/{lesson_id}", response_model=schemas.DeleteResponse)
def delete_lesson(lesson_id: str, lessons: Lessons):
    return {"deletedCount": lessons.delete(lesson_id)}


@router.patch("/lessons/{lesson_id}/like")
def toggle_lesson_like(lesson_id: str, payload: schemas.ToggleRequest, lessons: Lessons):
    return serialize_document(lessons.toggle_like(lesson_id, payload.userId))


@router.patch("/lessons/{lesson_id}/favorite")
def toggle_lesson_favorite(lesson_id: str, payload: schemas.ToggleRequest, lessons: Lessons):
    return serialize_document(lessons.toggle_favorite(lesson_id, payload.userId))


@router.post("/lessons/{lesson_id}/comments", status_code=status.HTTP_201_CREATED)
def add_lesson_comment(lesson_id: str, payload: schemas.CommentCreate, lessons: Lessons):
    return serialize_document(lessons.add_comment(lesson_id, payload.model_dump()))


@router.get("/lessons/{lesson_id}/related")
def list_related_lessons(
    lesson_id: str,
    lessons: Lessons,
    limit: int = Query(default=settings.related_lessons_limit, ge=1, le=50),
):
    return _many(lessons.list_related(lesson_id, limit=limit))


@router.post("/lessons/{lesson_id}/reports", status_code=status.HTTP_201_CREATED)
def report_lesson(lesson_id: str, payload: schemas.ReportCreate, reports: Reports):
    report = reports.file(
        lesson_id,
        payload.reporterEmail,
        payload.reason,
        title=payload.title,
        category=payload.category,
    )
    return serialize_document(report)


@admin_router.patch("/{lesson_id}/featured")
def set_lesson_featured(lesson_id: str, payload: schemas.FeaturedUpdate, lessons: Lessons):
    return serialize_document(lessons.set_featured(lesson_id, payload.isFeatured))


@admin_router.patch("/{lesson_id}/reviewed")
def mark_lesson_reviewed(lesson_id: str, lessons: Lessons):
    return serialize_document(lessons.set_reviewed(lesson_id))
