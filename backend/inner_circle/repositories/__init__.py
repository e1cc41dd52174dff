from .lessons import LessonFilter, LessonRepository
from .reports import ReportRepository
from .users import RegistrationResult, UserRepository

__all__ = [
    "LessonFilter",
    "LessonRepository",
    "RegistrationResult",
    "ReportRepository",
    "UserRepository",
]
