from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ReportCreate(BaseModel):
    reporterEmail: str
    reason: str
    title: Optional[str] = None
    category: Optional[str] = None


class ReportEntry(BaseModel):
    reason: Optional[str] = None
    reporterEmail: Optional[str] = None
    timestamp: Optional[datetime] = None


class LessonReportGroup(BaseModel):
    lessonId: str
    title: Optional[str] = None
    category: Optional[str] = None
    reports: list[ReportEntry]
    reportCount: int
