from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ActivityType(str, Enum):
    BAN = "ban"
    REPORT = "report"
    TOXIC_COMMENT = "toxic_comment"
    PENDING_VIDEO = "pending_video"
    NSFW_VIDEO = "nsfw_video"
    NEW_USER = "new_user"


class ActivitySeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class ActivityParams(BaseModel):
    limit: int = Field(default=50, ge=1, le=100)
    days: int = Field(default=7, ge=1, le=90)


class ActivityItem(BaseModel):
    """One entry of the merged moderation timeline. Computed, never stored."""

    id: str
    type: ActivityType
    title: str
    description: str
    timestamp: datetime
    severity: ActivitySeverity
