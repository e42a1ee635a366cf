from uuid import UUID

from pydantic import BaseModel

from app.schemas.community import PostResponse
from app.schemas.user import UserSummary


class ChannelProfileResponse(BaseModel):
    user: UserSummary
    video_count: int
    subscriber_count: int
    community_posts: list[PostResponse]


class SubscriptionStatusResponse(BaseModel):
    creator_id: UUID
    subscribed: bool
    subscriber_count: int


class SubscriberCountResponse(BaseModel):
    creator_id: UUID
    subscriber_count: int
