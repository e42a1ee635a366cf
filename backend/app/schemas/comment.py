from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.user import UserSummary


class CommentCreate(BaseModel):
    video_id: UUID
    content: str = Field(..., min_length=1, max_length=5000)
    toxicity_score: float = Field(default=0, ge=0, le=1)


class CommentResponse(BaseModel):
    id: UUID
    user_id: UUID
    video_id: UUID
    content: str
    is_toxic: bool
    is_hidden: bool
    toxicity_score: float
    created_at: datetime

    model_config = {"from_attributes": True}


class CommentVideoSummary(BaseModel):
    id: UUID
    title: str

    model_config = {"from_attributes": True}


class CommentWithContext(CommentResponse):
    user: UserSummary
    video: CommentVideoSummary


class CommentListParams(BaseModel):
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)
    search: str | None = Field(default=None, max_length=255)


class FlaggedCommentListParams(BaseModel):
    limit: int = Field(default=100, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class CommentListResponse(BaseModel):
    items: list[CommentWithContext]
    total: int
