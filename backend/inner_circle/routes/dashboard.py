from __future__ import annotations

from fastapi import APIRouter

from .. import schemas
from ..db import serialize_document
from ..dependencies import Summaries

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard/users/{email}/summary", response_model=schemas.UserSummary)
def user_summary(email: str, summaries: Summaries):
    return serialize_document(summaries.user_summary(email))


@router.get("/dashboard/users/{email}/analytics", response_model=list[schemas.AnalyticsBucket])
def user_analytics(email: str, summaries: Summaries):
    return summaries.user_analytics(email)


@router.get("/admin/summary", response_model=schemas.AdminSummary)
def admin_summary(summaries: Summaries):
    return summaries.admin_summary()
