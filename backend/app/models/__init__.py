from app.models.channel_subscription import ChannelSubscription
from app.models.comment import Comment
from app.models.community import CommunityPost, PollOption, PollVote, PostComment, PostLike, PostType
from app.models.notification import (
    AdminNotification,
    AdminNotificationPriority,
    AdminNotificationType,
    TargetType,
)
from app.models.report import Report, ReportStatus
from app.models.user import User, UserRole
from app.models.video import Video, VideoStatus, VideoVisibility

__all__ = [
    "AdminNotification",
    "AdminNotificationPriority",
    "AdminNotificationType",
    "ChannelSubscription",
    "Comment",
    "CommunityPost",
    "PollOption",
    "PollVote",
    "PostComment",
    "PostLike",
    "PostType",
    "Report",
    "ReportStatus",
    "TargetType",
    "User",
    "UserRole",
    "Video",
    "VideoStatus",
    "VideoVisibility",
]
