from __future__ import annotations

from fastapi import APIRouter

from .. import schemas
from ..db import serialize_document
from ..dependencies import Reports

router = APIRouter(prefix="/admin/reports", tags=["admin"])


@router.get("", response_model=list[schemas.LessonReportGroup])
def list_reported_lessons(reports: Reports):
    return [serialize_document(group) for group in reports.list_grouped_by_lesson()]


@router.delete("/{lesson_id}", response_model=schemas.DeleteResponse)
def clear_lesson_reports(lesson_id: str, reports: Reports):
    return {"deletedCount": reports.clear_for_lesson(lesson_id)}
