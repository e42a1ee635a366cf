from app.repositories.activity_repository import ActivityRepository
from app.repositories.channel_subscription_repository import ChannelSubscriptionRepository
from app.repositories.comment_repository import CommentRepository
from app.repositories.community_repository import CommunityRepository
from app.repositories.dashboard_repository import DashboardRepository
from app.repositories.notification_repository import AdminNotificationRepository
from app.repositories.report_repository import ReportRepository
from app.repositories.user_repository import UserRepository
from app.repositories.video_repository import VideoRepository

__all__ = [
    "ActivityRepository",
    "AdminNotificationRepository",
    "ChannelSubscriptionRepository",
    "CommentRepository",
    "CommunityRepository",
    "DashboardRepository",
    "ReportRepository",
    "UserRepository",
    "VideoRepository",
]
