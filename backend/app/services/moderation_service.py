"""Staff-only moderation reads and single-row mutations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.auth import Caller, ensure_staff
from app.core.database import translate_db_errors
from app.core.errors import NotFoundError, ValidationError, validate_input
from app.core.identity import EntityRef, resolve_ref
from app.models.comment import Comment
from app.models.user import User
from app.models.video import Video, VideoStatus
from app.repositories.comment_repository import CommentRepository, CommentRow
from app.repositories.dashboard_repository import DashboardRepository
from app.repositories.user_repository import UserRepository
from app.repositories.video_repository import VideoRepository
from app.schemas.comment import (
    CommentListParams,
    CommentListResponse,
    CommentVideoSummary,
    CommentWithContext,
    FlaggedCommentListParams,
)
from app.schemas.moderation import LimitParams, ModerationStatsResponse
from app.schemas.user import (
    BanUserRequest,
    UpdateUserRoleRequest,
    UserListParams,
    UserListResponse,
    UserResponse,
    UserSummary,
)
from app.schemas.video import (
    NsfwToggleRequest,
    VideoListParams,
    VideoListResponse,
    VideoResponse,
    VideoStatusUpdate,
    VideoWithUploader,
)

logger = logging.getLogger(__name__)

Params = Mapping[str, Any] | None


def _ref(raw: str | UUID) -> EntityRef:
    if isinstance(raw, str) and not raw.strip():
        raise ValidationError("Reference must not be empty")
    return resolve_ref(raw)


def _video_with_uploader(video: Video, user: User) -> VideoWithUploader:
    return VideoWithUploader(
        **VideoResponse.model_validate(video).model_dump(),
        user=UserSummary.model_validate(user),
    )


def _comment_page(rows: list[CommentRow], total: int) -> CommentListResponse:
    items = [
        CommentWithContext(
            id=comment.id,
            user_id=comment.user_id,
            video_id=comment.video_id,
            content=comment.content,
            is_toxic=comment.is_toxic,
            is_hidden=comment.is_hidden,
            toxicity_score=comment.toxicity_score,
            created_at=comment.created_at,
            user=UserSummary.model_validate(user),
            video=CommentVideoSummary.model_validate(video),
        )
        for comment, user, video in rows
    ]
    return CommentListResponse(items=items, total=total)


class ModerationService:
    """Every method takes the acting ``caller`` first and checks the staff
    role before touching the database."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.videos = VideoRepository(db)
        self.comments = CommentRepository(db)
        self.stats = DashboardRepository(db)

    # ── Users ─────────────────────────────────────────────────────

    def list_users(self, caller: Caller, params: UserListParams | Params = None) -> UserListResponse:
        ensure_staff(caller)
        p = validate_input(UserListParams, params)
        with translate_db_errors(self.db):
            users, total = self.users.get_all(p)
        return UserListResponse(items=[UserResponse.model_validate(u) for u in users], total=total)

    def list_banned_users(self, caller: Caller, params: LimitParams | Params = None) -> list[User]:
        ensure_staff(caller)
        p = validate_input(LimitParams, params)
        with translate_db_errors(self.db):
            return self.users.get_banned(p.limit)

    def ban_user(self, caller: Caller, user_ref: str | UUID, reason: str) -> User:
        ensure_staff(caller)
        data = validate_input(BanUserRequest, {"reason": reason})
        ref = _ref(user_ref)
        with translate_db_errors(self.db):
            user = self.users.update_by_ref(ref, {"is_banned": True, "ban_reason": data.reason})
        if user is None:
            raise NotFoundError("User not found")
        logger.info("User %s banned by %s", user.id, caller.user_id)
        return user

    def unban_user(self, caller: Caller, user_ref: str | UUID) -> User:
        ensure_staff(caller)
        ref = _ref(user_ref)
        with translate_db_errors(self.db):
            user = self.users.update_by_ref(ref, {"is_banned": False, "ban_reason": None})
        if user is None:
            raise NotFoundError("User not found")
        logger.info("User %s unbanned by %s", user.id, caller.user_id)
        return user

    def update_user_role(self, caller: Caller, user_ref: str | UUID, role: str) -> User:
        ensure_staff(caller)
        data = validate_input(UpdateUserRoleRequest, {"role": role})
        ref = _ref(user_ref)
        with translate_db_errors(self.db):
            user = self.users.update_by_ref(ref, {"role": data.role.value})
        if user is None:
            raise NotFoundError("User not found")
        return user

    def delete_user(self, caller: Caller, user_ref: str | UUID) -> None:
        ensure_staff(caller)
        ref = _ref(user_ref)
        with translate_db_errors(self.db):
            deleted = self.users.delete_by_ref(ref)
        if not deleted:
            raise NotFoundError("User not found")
        logger.info("User %s deleted by %s", ref, caller.user_id)

    # ── Videos ────────────────────────────────────────────────────

    def list_videos(
        self, caller: Caller, params: VideoListParams | Params = None
    ) -> VideoListResponse:
        ensure_staff(caller)
        p = validate_input(VideoListParams, params)
        with translate_db_errors(self.db):
            rows, total = self.videos.get_all_with_uploader(p)
        return VideoListResponse(
            items=[_video_with_uploader(video, user) for video, user in rows], total=total
        )

    def list_pending_videos(
        self, caller: Caller, params: LimitParams | Params = None
    ) -> list[VideoWithUploader]:
        ensure_staff(caller)
        p = validate_input(LimitParams, params)
        with translate_db_errors(self.db):
            rows = self.videos.get_pending_with_uploader(p.limit)
        return [_video_with_uploader(video, user) for video, user in rows]

    def list_nsfw_videos(
        self, caller: Caller, params: LimitParams | Params = None
    ) -> list[VideoWithUploader]:
        ensure_staff(caller)
        p = validate_input(LimitParams, params)
        with translate_db_errors(self.db):
            rows = self.videos.get_nsfw_with_uploader(p.limit)
        return [_video_with_uploader(video, user) for video, user in rows]

    def update_video_status(
        self,
        caller: Caller,
        video_ref: str | UUID,
        status: str,
        rejection_reason: str | None = None,
    ) -> Video:
        ensure_staff(caller)
        data = validate_input(
            VideoStatusUpdate, {"status": status, "rejection_reason": rejection_reason}
        )
        ref = _ref(video_ref)
        values: dict[str, object] = {
            "status": data.status.value,
            # Only rejected videos carry a reason
            "rejection_reason": (
                data.rejection_reason if data.status == VideoStatus.REJECTED else None
            ),
        }
        with translate_db_errors(self.db):
            video = self.videos.update_by_ref(ref, values)
        if video is None:
            raise NotFoundError("Video not found")
        logger.info("Video %s set to %s by %s", video.id, data.status.value, caller.user_id)
        return video

    def toggle_nsfw(self, caller: Caller, video_ref: str | UUID, is_nsfw: bool) -> Video:
        ensure_staff(caller)
        data = validate_input(NsfwToggleRequest, {"is_nsfw": is_nsfw})
        ref = _ref(video_ref)
        with translate_db_errors(self.db):
            video = self.videos.update_by_ref(ref, {"is_nsfw": data.is_nsfw})
        if video is None:
            raise NotFoundError("Video not found")
        return video

    def delete_video(self, caller: Caller, video_ref: str | UUID) -> None:
        ensure_staff(caller)
        ref = _ref(video_ref)
        with translate_db_errors(self.db):
            deleted = self.videos.delete_by_ref(ref)
        if not deleted:
            raise NotFoundError("Video not found")
        logger.info("Video %s deleted by %s", ref, caller.user_id)

    # ── Comments ──────────────────────────────────────────────────

    def list_comments(
        self, caller: Caller, params: CommentListParams | Params = None
    ) -> CommentListResponse:
        ensure_staff(caller)
        p = validate_input(CommentListParams, params)
        with translate_db_errors(self.db):
            rows, total = self.comments.get_all(skip=p.offset, limit=p.limit, search=p.search)
        return _comment_page(rows, total)

    def list_toxic_comments(
        self, caller: Caller, params: FlaggedCommentListParams | Params = None
    ) -> CommentListResponse:
        ensure_staff(caller)
        p = validate_input(FlaggedCommentListParams, params)
        with translate_db_errors(self.db):
            rows, total = self.comments.get_toxic(skip=p.offset, limit=p.limit)
        return _comment_page(rows, total)

    def list_hidden_comments(
        self, caller: Caller, params: FlaggedCommentListParams | Params = None
    ) -> CommentListResponse:
        ensure_staff(caller)
        p = validate_input(FlaggedCommentListParams, params)
        with translate_db_errors(self.db):
            rows, total = self.comments.get_hidden(skip=p.offset, limit=p.limit)
        return _comment_page(rows, total)

    def delete_comment(self, caller: Caller, comment_id: UUID) -> None:
        ensure_staff(caller)
        with translate_db_errors(self.db):
            deleted = self.comments.delete(comment_id)
        if not deleted:
            raise NotFoundError("Comment not found")

    def unmark_toxic_comment(self, caller: Caller, comment_id: UUID) -> Comment:
        ensure_staff(caller)
        with translate_db_errors(self.db):
            comment = self.comments.update_fields(
                comment_id, {"is_toxic": False, "toxicity_score": 0}
            )
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    def unhide_comment(self, caller: Caller, comment_id: UUID) -> Comment:
        ensure_staff(caller)
        with translate_db_errors(self.db):
            comment = self.comments.update_fields(comment_id, {"is_hidden": False})
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    # ── Stats ─────────────────────────────────────────────────────

    def get_stats(self, caller: Caller) -> ModerationStatsResponse:
        ensure_staff(caller)
        with translate_db_errors(self.db):
            return ModerationStatsResponse(
                total_users=self.stats.count_users(),
                total_videos=self.stats.count_videos(),
                total_comments=self.stats.count_comments(),
                total_views=self.stats.sum_views(),
                banned_users=self.stats.count_banned_users(),
                pending_videos=self.stats.count_pending_videos(),
                nsfw_videos=self.stats.count_nsfw_videos(),
                toxic_comments=self.stats.count_toxic_comments(),
                hidden_comments=self.stats.count_hidden_comments(),
            )
