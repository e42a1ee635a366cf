"""Admin console API: moderation queues, mutations, stats and activity."""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth import Caller, get_staff_caller
from app.core.database import get_db
from app.schemas.activity import ActivityItem
from app.schemas.comment import CommentListResponse, CommentResponse
from app.schemas.moderation import ModerationStatsResponse
from app.schemas.user import (
    BanUserRequest,
    UpdateUserRoleRequest,
    UserListResponse,
    UserResponse,
)
from app.schemas.video import (
    NsfwToggleRequest,
    VideoListResponse,
    VideoResponse,
    VideoStatusUpdate,
    VideoWithUploader,
)
from app.services.activity_service import ActivityAggregator
from app.services.moderation_service import ModerationService

router = APIRouter()

STAFF_ONLY = {
    401: {"description": "Unauthorized – invalid or missing token"},
    403: {"description": "Admin or moderator role required"},
}


# ── Users ─────────────────────────────────────────────────────────


@router.get(
    "/users",
    response_model=UserListResponse,
    summary="List users",
    responses=STAFF_ONLY,
)
async def list_users(
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    search: str | None = Query(default=None, max_length=255),
    role: Literal["all", "user", "admin", "moderator"] = Query(default="all"),
    banned: Literal["all", "banned", "active"] = Query(default="all"),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> UserListResponse:
    """List users, searching name or external id case-insensitively."""
    return ModerationService(db).list_users(
        caller,
        {
            "limit": limit,
            "offset": offset,
            "search": search,
            "role": role,
            "banned": banned,
            "order_by": order_by,
        },
    )


@router.get(
    "/users/banned",
    response_model=list[UserResponse],
    summary="List banned users",
    responses=STAFF_ONLY,
)
async def list_banned_users(
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> list[UserResponse]:
    users = ModerationService(db).list_banned_users(caller, {"limit": limit})
    return [UserResponse.model_validate(u) for u in users]


@router.post(
    "/users/{user_ref}/ban",
    response_model=UserResponse,
    summary="Ban a user",
    responses={**STAFF_ONLY, 404: {"description": "User not found"}},
)
async def ban_user(
    user_ref: str,
    data: BanUserRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> UserResponse:
    """Ban a user by id or external id."""
    user = ModerationService(db).ban_user(caller, user_ref, data.reason)
    return UserResponse.model_validate(user)


@router.post(
    "/users/{user_ref}/unban",
    response_model=UserResponse,
    summary="Unban a user",
    responses={**STAFF_ONLY, 404: {"description": "User not found"}},
)
async def unban_user(
    user_ref: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> UserResponse:
    user = ModerationService(db).unban_user(caller, user_ref)
    return UserResponse.model_validate(user)


@router.put(
    "/users/{user_ref}/role",
    response_model=UserResponse,
    summary="Change a user's role",
    responses={**STAFF_ONLY, 404: {"description": "User not found"}},
)
async def update_user_role(
    user_ref: str,
    data: UpdateUserRoleRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> UserResponse:
    user = ModerationService(db).update_user_role(caller, user_ref, data.role.value)
    return UserResponse.model_validate(user)


@router.delete(
    "/users/{user_ref}",
    status_code=204,
    summary="Delete a user",
    responses={**STAFF_ONLY, 404: {"description": "User not found"}},
)
async def delete_user(
    user_ref: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> None:
    ModerationService(db).delete_user(caller, user_ref)


# ── Videos ────────────────────────────────────────────────────────


@router.get(
    "/videos",
    response_model=VideoListResponse,
    summary="List videos",
    responses=STAFF_ONLY,
)
async def list_videos(
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    status: Literal["all", "draft", "pending", "published", "rejected"] = Query(default="all"),
    search: str | None = Query(default=None, max_length=255),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> VideoListResponse:
    """List videos with their uploader, filtered by status and title."""
    return ModerationService(db).list_videos(
        caller,
        {
            "limit": limit,
            "offset": offset,
            "status": status,
            "search": search,
            "order_by": order_by,
        },
    )


@router.get(
    "/videos/pending",
    response_model=list[VideoWithUploader],
    summary="List videos awaiting review",
    responses=STAFF_ONLY,
)
async def list_pending_videos(
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> list[VideoWithUploader]:
    return ModerationService(db).list_pending_videos(caller, {"limit": limit})


@router.get(
    "/videos/nsfw",
    response_model=list[VideoWithUploader],
    summary="List NSFW-flagged videos",
    responses=STAFF_ONLY,
)
async def list_nsfw_videos(
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> list[VideoWithUploader]:
    return ModerationService(db).list_nsfw_videos(caller, {"limit": limit})


@router.put(
    "/videos/{video_ref}/status",
    response_model=VideoResponse,
    summary="Approve or reject a video",
    responses={**STAFF_ONLY, 404: {"description": "Video not found"}},
)
async def update_video_status(
    video_ref: str,
    data: VideoStatusUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> VideoResponse:
    video = ModerationService(db).update_video_status(
        caller, video_ref, data.status.value, data.rejection_reason
    )
    return VideoResponse.model_validate(video)


@router.put(
    "/videos/{video_ref}/nsfw",
    response_model=VideoResponse,
    summary="Set or clear the NSFW flag",
    responses={**STAFF_ONLY, 404: {"description": "Video not found"}},
)
async def toggle_nsfw(
    video_ref: str,
    data: NsfwToggleRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> VideoResponse:
    video = ModerationService(db).toggle_nsfw(caller, video_ref, data.is_nsfw)
    return VideoResponse.model_validate(video)


@router.delete(
    "/videos/{video_ref}",
    status_code=204,
    summary="Delete a video",
    responses={**STAFF_ONLY, 404: {"description": "Video not found"}},
)
async def delete_video(
    video_ref: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> None:
    ModerationService(db).delete_video(caller, video_ref)


# ── Comments ──────────────────────────────────────────────────────


@router.get(
    "/comments",
    response_model=CommentListResponse,
    summary="List comments",
    responses=STAFF_ONLY,
)
async def list_comments(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    search: str | None = Query(default=None, max_length=255),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> CommentListResponse:
    return ModerationService(db).list_comments(
        caller, {"limit": limit, "offset": offset, "search": search}
    )


@router.get(
    "/comments/toxic",
    response_model=CommentListResponse,
    summary="List comments flagged as toxic",
    responses=STAFF_ONLY,
)
async def list_toxic_comments(
    limit: int = Query(default=100, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> CommentListResponse:
    return ModerationService(db).list_toxic_comments(caller, {"limit": limit, "offset": offset})


@router.get(
    "/comments/hidden",
    response_model=CommentListResponse,
    summary="List hidden comments",
    responses=STAFF_ONLY,
)
async def list_hidden_comments(
    limit: int = Query(default=100, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> CommentListResponse:
    return ModerationService(db).list_hidden_comments(caller, {"limit": limit, "offset": offset})


@router.post(
    "/comments/{comment_id}/unmark_toxic",
    response_model=CommentResponse,
    summary="Clear the toxic flag on a comment",
    responses={**STAFF_ONLY, 404: {"description": "Comment not found"}},
)
async def unmark_toxic_comment(
    comment_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> CommentResponse:
    comment = ModerationService(db).unmark_toxic_comment(caller, comment_id)
    return CommentResponse.model_validate(comment)


@router.post(
    "/comments/{comment_id}/unhide",
    response_model=CommentResponse,
    summary="Make a hidden comment visible again",
    responses={**STAFF_ONLY, 404: {"description": "Comment not found"}},
)
async def unhide_comment(
    comment_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> CommentResponse:
    comment = ModerationService(db).unhide_comment(caller, comment_id)
    return CommentResponse.model_validate(comment)


@router.delete(
    "/comments/{comment_id}",
    status_code=204,
    summary="Delete a comment",
    responses={**STAFF_ONLY, 404: {"description": "Comment not found"}},
)
async def delete_comment(
    comment_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> None:
    ModerationService(db).delete_comment(caller, comment_id)


# ── Overview ──────────────────────────────────────────────────────


@router.get(
    "/stats",
    response_model=ModerationStatsResponse,
    summary="Get moderation counters",
    responses=STAFF_ONLY,
)
async def get_stats(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> ModerationStatsResponse:
    return ModerationService(db).get_stats(caller)


@router.get(
    "/activity",
    response_model=list[ActivityItem],
    summary="Get recent moderation activity",
    responses={**STAFF_ONLY, 503: {"description": "An activity source failed"}},
)
def get_recent_activity(
    limit: int = Query(default=50, ge=1, le=100),
    days: int = Query(default=7, ge=1, le=90),
    caller: Caller = Depends(get_staff_caller),
) -> list[ActivityItem]:
    """Merged timeline of bans, reports, toxic comments, pending and NSFW videos and signups."""
    return ActivityAggregator().get_recent_activity(caller, {"limit": limit, "days": days})
