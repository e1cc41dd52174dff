from typing import Any, Optional

from pydantic import BaseModel


class UserSummary(BaseModel):
    totalLessons: int
    totalFavorites: int
    recentLessons: list[dict[str, Any]]


class AnalyticsBucket(BaseModel):
    month: str
    category: Optional[str] = None
    tone: Optional[str] = None
    count: int


class MonthlyCount(BaseModel):
    month: str
    count: int


class Contributor(BaseModel):
    email: str
    name: Optional[str] = None
    photo: Optional[str] = None
    lessonCount: int


class AdminSummary(BaseModel):
    totalUsers: int
    totalPublicLessons: int
    totalReports: int
    topContributors: list[Contributor]
    todayLessons: int
    lessonsPerMonth: list[MonthlyCount]
    usersPerMonth: list[MonthlyCount]
