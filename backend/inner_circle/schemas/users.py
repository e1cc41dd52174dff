from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: str
    displayName: Optional[str] = None
    photoURL: Optional[str] = None


class UserRecord(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    email: str
    role: str = "user"
    isPremium: bool = False
    createdAt: Optional[datetime] = None
    displayName: Optional[str] = None
    photoURL: Optional[str] = None


class UserWithLessonCount(UserRecord):
    totalLessons: int = 0


class RegistrationResponse(BaseModel):
    created: bool
    message: Optional[str] = None
    insertedId: Optional[str] = None
    user: dict[str, Any]


class ProfileUpdate(BaseModel):
    displayName: Optional[str] = None
    photoURL: Optional[str] = None


class RoleUpdate(BaseModel):
    # Stored as sent; the role list is not enforced.
    role: str


class RoleResponse(BaseModel):
    role: str
