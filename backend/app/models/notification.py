"""Admin notification model for the moderation console."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Column, DateTime, String, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class AdminNotificationType(str, Enum):
    NEW_VIDEO_UPLOAD = "new_video_upload"
    NEW_COMMENT = "new_comment"
    TOXIC_COMMENT = "toxic_comment"
    NEW_REPORT = "new_report"
    NEW_COMMUNITY_POST = "new_community_post"
    NEW_USER_SIGNUP = "new_user_signup"
    VIDEO_UPDATED = "video_updated"
    NSFW_FLAGGED = "nsfw_flagged"
    SPAM_DETECTED = "spam_detected"


class AdminNotificationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TargetType(str, Enum):
    VIDEO = "video"
    COMMENT = "comment"
    COMMUNITY_POST = "community_post"
    REPORT = "report"
    USER = "user"


class AdminNotification(Base):
    """Persisted event surfaced only to admins and moderators.

    Rows are append-only apart from the independent ``is_read`` and
    ``is_dismissed`` flags.
    """

    __tablename__ = "admin_notifications"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    type = Column(String(40), nullable=False, index=True)
    priority = Column(
        String(20), nullable=False, default=AdminNotificationPriority.MEDIUM.value, index=True
    )
    title = Column(String(255), nullable=False)
    message = Column(String(1000), nullable=False)
    link = Column(String(2048), nullable=True)
    actor_id = Column(UUIDType, nullable=True)
    target_type = Column(String(30), nullable=True)
    target_id = Column(UUIDType, nullable=True)
    # "metadata" is reserved on declarative classes
    metadata_ = Column("metadata", JSON, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    is_dismissed = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
