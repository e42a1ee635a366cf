from app.schemas.activity import ActivityItem, ActivityParams, ActivitySeverity, ActivityType
from app.schemas.channel import (
    ChannelProfileResponse,
    SubscriberCountResponse,
    SubscriptionStatusResponse,
)
from app.schemas.comment import (
    CommentCreate,
    CommentListParams,
    CommentListResponse,
    CommentResponse,
    CommentWithContext,
    FlaggedCommentListParams,
)
from app.schemas.community import (
    FeedParams,
    LikeStatusResponse,
    PollOptionResponse,
    PostCommentCreate,
    PostCommentResponse,
    PostCreate,
    PostResponse,
    VoteRequest,
    VoteStatusResponse,
)
from app.schemas.moderation import LimitParams, ModerationStatsResponse
from app.schemas.notification import (
    AdminNotificationCreate,
    AdminNotificationListParams,
    AdminNotificationResponse,
    CommentTarget,
    CommunityPostTarget,
    NotificationBulkResponse,
    NotificationCountResponse,
    NotificationTarget,
    ReportTarget,
    UserTarget,
    VideoTarget,
)
from app.schemas.report import ReportableTarget, ReportCreate, ReportResponse
from app.schemas.user import (
    BanUserRequest,
    SignUpRequest,
    UpdateUserRoleRequest,
    UserListParams,
    UserListResponse,
    UserResponse,
    UserSignUp,
    UserSummary,
)
from app.schemas.video import (
    ClassifierScore,
    NsfwToggleRequest,
    VideoCreate,
    VideoListParams,
    VideoListResponse,
    VideoResponse,
    VideoStatusUpdate,
    VideoUpdate,
    VideoWithUploader,
)

__all__ = [
    "ActivityItem",
    "ActivityParams",
    "ActivitySeverity",
    "ActivityType",
    "ChannelProfileResponse",
    "SubscriberCountResponse",
    "SubscriptionStatusResponse",
    "CommentCreate",
    "CommentListParams",
    "CommentListResponse",
    "CommentResponse",
    "CommentWithContext",
    "FlaggedCommentListParams",
    "FeedParams",
    "LikeStatusResponse",
    "PollOptionResponse",
    "PostCommentCreate",
    "PostCommentResponse",
    "PostCreate",
    "PostResponse",
    "VoteRequest",
    "VoteStatusResponse",
    "LimitParams",
    "ModerationStatsResponse",
    "AdminNotificationCreate",
    "AdminNotificationListParams",
    "AdminNotificationResponse",
    "CommentTarget",
    "CommunityPostTarget",
    "NotificationBulkResponse",
    "NotificationCountResponse",
    "NotificationTarget",
    "ReportTarget",
    "UserTarget",
    "VideoTarget",
    "ReportableTarget",
    "ReportCreate",
    "ReportResponse",
    "BanUserRequest",
    "SignUpRequest",
    "UpdateUserRoleRequest",
    "UserListParams",
    "UserListResponse",
    "UserResponse",
    "UserSignUp",
    "UserSummary",
    "ClassifierScore",
    "NsfwToggleRequest",
    "VideoCreate",
    "VideoListParams",
    "VideoListResponse",
    "VideoResponse",
    "VideoStatusUpdate",
    "VideoUpdate",
    "VideoWithUploader",
]
