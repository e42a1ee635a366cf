from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.community import PostType
from app.schemas.user import UserSummary


class PostCreate(BaseModel):
    type: PostType = PostType.TEXT
    content: str = Field(..., min_length=1, max_length=5000)
    image_url: str | None = Field(default=None, max_length=2048)
    poll_options: list[str] | None = None

    @model_validator(mode="after")
    def check_type_payload(self) -> "PostCreate":
        if self.type == PostType.IMAGE and not self.image_url:
            raise ValueError("Image posts require image_url")
        if self.type == PostType.POLL:
            options = [o.strip() for o in (self.poll_options or []) if o.strip()]
            if not 2 <= len(options) <= 6:
                raise ValueError("Polls need between 2 and 6 non-empty options")
            if any(len(o) > 200 for o in options):
                raise ValueError("Poll options are limited to 200 characters")
            self.poll_options = options
        elif self.poll_options:
            raise ValueError("Only poll posts accept poll_options")
        return self


class PollOptionResponse(BaseModel):
    id: UUID
    text: str
    position: int
    vote_count: int

    model_config = {"from_attributes": True}


class PostResponse(BaseModel):
    id: UUID
    user_id: UUID
    type: str
    content: str
    image_url: str | None
    like_count: int
    comment_count: int
    created_at: datetime
    user: UserSummary | None = None
    poll_options: list[PollOptionResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class FeedParams(BaseModel):
    limit: int = Field(default=20, ge=1, le=50)
    offset: int = Field(default=0, ge=0)


class PostCommentListParams(BaseModel):
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class VoteRequest(BaseModel):
    option_id: UUID


class VoteStatusResponse(BaseModel):
    has_voted: bool
    option_id: UUID | None = None


class LikeStatusResponse(BaseModel):
    liked: bool
    like_count: int


class PostCommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class PostCommentResponse(BaseModel):
    id: UUID
    post_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    user: UserSummary | None = None

    model_config = {"from_attributes": True}
