from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from .db import DocumentStore
from .repositories import LessonRepository, ReportRepository, UserRepository
from .services.summary_service import SummaryService


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


Store = Annotated[DocumentStore, Depends(get_store)]


def get_user_repository(store: Store) -> UserRepository:
    return UserRepository(store)


def get_lesson_repository(store: Store) -> LessonRepository:
    return LessonRepository(store)


def get_report_repository(store: Store) -> ReportRepository:
    return ReportRepository(store)


def get_summary_service(store: Store) -> SummaryService:
    return SummaryService(store)


Users = Annotated[UserRepository, Depends(get_user_repository)]
Lessons = Annotated[LessonRepository, Depends(get_lesson_repository)]
Reports = Annotated[ReportRepository, Depends(get_report_repository)]
Summaries = Annotated[SummaryService, Depends(get_summary_service)]

__all__ = [
    "Lessons",
    "Reports",
    "Store",
    "Summaries",
    "Users",
    "get_store",
]
