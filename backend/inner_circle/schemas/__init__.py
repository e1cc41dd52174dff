from .dashboard import AdminSummary, AnalyticsBucket, Contributor, MonthlyCount, UserSummary
from .lessons import (
    CommentCreate,
    DeleteResponse,
    FeaturedUpdate,
    LessonCreate,
    LessonUpdate,
    ToggleRequest,
)
from .payments import (
    CheckoutSessionRequest,
    CheckoutSessionResponse,
    PaymentConfirmRequest,
    PaymentConfirmResponse,
)
from .reports import LessonReportGroup, ReportCreate, ReportEntry
from .users import (
    ProfileUpdate,
    RegistrationResponse,
    RoleResponse,
    RoleUpdate,
    UserCreate,
    UserRecord,
    UserWithLessonCount,
)

__all__ = [
    "AdminSummary",
    "AnalyticsBucket",
    "CheckoutSessionRequest",
    "CheckoutSessionResponse",
    "CommentCreate",
    "Contributor",
    "DeleteResponse",
    "FeaturedUpdate",
    "LessonCreate",
    "LessonReportGroup",
    "LessonUpdate",
    "MonthlyCount",
    "PaymentConfirmRequest",
    "PaymentConfirmResponse",
    "ProfileUpdate",
    "RegistrationResponse",
    "ReportCreate",
    "ReportEntry",
    "RoleResponse",
    "RoleUpdate",
    "ToggleRequest",
    "UserCreate",
    "UserRecord",
    "UserSummary",
    "UserWithLessonCount",
]
