from pydantic import BaseModel, Field


class LimitParams(BaseModel):
    limit: int = Field(default=50, ge=1, le=200)


class ModerationStatsResponse(BaseModel):
    total_users: int
    total_videos: int
    total_comments: int
    total_views: int
    banned_users: int
    pending_videos: int
    nsfw_videos: int
    toxic_comments: int
    hidden_comments: int
