from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.notification import CommentTarget, CommunityPostTarget, UserTarget, VideoTarget

# Reports cannot point at other reports.
ReportableTarget = Annotated[
    VideoTarget | CommentTarget | CommunityPostTarget | UserTarget,
    Field(discriminator="target_type"),
]


class ReportCreate(BaseModel):
    target: ReportableTarget
    reason: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)


class ReportResponse(BaseModel):
    id: UUID
    reporter_id: UUID | None
    target_type: str
    target_id: UUID
    reason: str
    description: str | None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
