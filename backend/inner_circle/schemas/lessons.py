from typing import Optional

from pydantic import BaseModel, ConfigDict


class LessonCreate(BaseModel):
    """Submitted lesson; unknown fields are stored as sent."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tone: Optional[str] = None
    image: Optional[str] = None
    privacy: Optional[str] = None
    accessLevel: Optional[str] = None
    creatorEmail: Optional[str] = None
    creatorName: Optional[str] = None
    creatorPhoto: Optional[str] = None


class LessonUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tone: Optional[str] = None
    image: Optional[str] = None
    privacy: Optional[str] = None
    accessLevel: Optional[str] = None


class ToggleRequest(BaseModel):
    userId: str


class CommentCreate(BaseModel):
    userId: str
    userName: Optional[str] = None
    userPhoto: Optional[str] = None
    text: str


class FeaturedUpdate(BaseModel):
    isFeatured: bool


class DeleteResponse(BaseModel):
    deletedCount: int

