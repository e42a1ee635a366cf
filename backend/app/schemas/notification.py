"""Pydantic schemas for admin notifications."""

from datetime import datetime
from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.notification import AdminNotificationPriority, AdminNotificationType


class VideoTarget(BaseModel):
    target_type: Literal["video"] = "video"
    target_id: UUID


class CommentTarget(BaseModel):
    target_type: Literal["comment"] = "comment"
    target_id: UUID


class CommunityPostTarget(BaseModel):
    target_type: Literal["community_post"] = "community_post"
    target_id: UUID


class ReportTarget(BaseModel):
    target_type: Literal["report"] = "report"
    target_id: UUID


class UserTarget(BaseModel):
    target_type: Literal["user"] = "user"
    target_id: UUID


NotificationTarget = Annotated[
    VideoTarget | CommentTarget | CommunityPostTarget | ReportTarget | UserTarget,
    Field(discriminator="target_type"),
]


class AdminNotificationCreate(BaseModel):
    type: AdminNotificationType
    priority: AdminNotificationPriority = AdminNotificationPriority.MEDIUM
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=1000)
    link: str | None = Field(default=None, max_length=2048)
    actor_id: UUID | None = None
    target: NotificationTarget | None = None
    metadata: dict[str, Any] | None = None


class AdminNotificationResponse(BaseModel):
    id: UUID
    type: str
    priority: str
    title: str
    message: str
    link: str | None
    actor_id: UUID | None
    target_type: str | None
    target_id: UUID | None
    metadata: dict[str, Any] | None = Field(default=None, validation_alias="metadata_")
    is_read: bool
    is_dismissed: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AdminNotificationListParams(BaseModel):
    limit: int = Field(default=30, ge=1, le=100)
    unread_only: bool = False
    priority: Literal["all", "low", "medium", "high", "critical"] = "all"
    type: AdminNotificationType | None = None


class NotificationCountResponse(BaseModel):
    unread_count: int
    poll_interval_seconds: int | None = None


class NotificationBulkResponse(BaseModel):
    success: bool = True
    count: int
