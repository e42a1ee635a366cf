from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.video import VideoStatus, VideoVisibility
from app.schemas.user import UserSummary


class VideoCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    thumbnail_url: str | None = Field(default=None, max_length=2048)
    upload_id: str | None = Field(default=None, min_length=1, max_length=255)
    visibility: VideoVisibility = VideoVisibility.PRIVATE


class VideoUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    thumbnail_url: str | None = Field(default=None, max_length=2048)
    visibility: VideoVisibility | None = None


class VideoResponse(BaseModel):
    id: UUID
    user_id: UUID
    upload_id: str | None
    title: str
    description: str | None
    thumbnail_url: str | None
    status: str
    visibility: str
    view_count: int
    is_nsfw: bool
    nsfw_score: float | None
    rejection_reason: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class VideoWithUploader(VideoResponse):
    user: UserSummary


class VideoListParams(BaseModel):
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    status: Literal["all", "draft", "pending", "published", "rejected"] = "all"
    search: str | None = Field(default=None, max_length=255)
    order_by: str | None = None


class VideoListResponse(BaseModel):
    items: list[VideoWithUploader]
    total: int


class VideoStatusUpdate(BaseModel):
    status: VideoStatus
    rejection_reason: str | None = Field(default=None, max_length=1000)


class NsfwToggleRequest(BaseModel):
    is_nsfw: bool


class ClassifierScore(BaseModel):
    score: float = Field(..., ge=0, le=1)
