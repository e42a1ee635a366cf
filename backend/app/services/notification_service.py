"""Admin notifications: the fire-and-forget Notifier and the console read/dismiss API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.auth import Caller, ensure_staff
from app.core.config import settings
from app.core.database import translate_db_errors
from app.core.errors import AppError, NotFoundError, validate_input
from app.models.notification import (
    AdminNotification,
    AdminNotificationPriority,
    AdminNotificationType,
)
from app.repositories.notification_repository import AdminNotificationRepository
from app.schemas.notification import (
    AdminNotificationCreate,
    AdminNotificationListParams,
    CommentTarget,
    CommunityPostTarget,
    NotificationCountResponse,
    ReportTarget,
    UserTarget,
    VideoTarget,
)

logger = logging.getLogger(__name__)

NotifyParams = AdminNotificationCreate | Mapping[str, Any]


def _excerpt(text: str, length: int = 100) -> str:
    return text if len(text) <= length else text[:length] + "…"


class AdminNotifier:
    """Appends admin notifications on behalf of business-event handlers.

    ``notify`` raises on invalid input or store failure and never retries.
    Event handlers go through ``notify_quietly`` (or the ``notify_*``
    helpers), which log and swallow failures so the triggering operation
    always completes.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = AdminNotificationRepository(db)

    def notify(self, params: NotifyParams) -> AdminNotification:
        data = validate_input(AdminNotificationCreate, params)
        with translate_db_errors(self.db):
            return self.repo.create(
                type=data.type.value,
                priority=data.priority.value,
                title=data.title,
                message=data.message,
                link=data.link,
                actor_id=data.actor_id,
                target_type=data.target.target_type if data.target else None,
                target_id=data.target.target_id if data.target else None,
                metadata=data.metadata,
            )

    def notify_quietly(self, params: NotifyParams) -> AdminNotification | None:
        try:
            return self.notify(params)
        except AppError as exc:
            logger.warning("Admin notification dropped: %s", exc.message or exc)
        except Exception:
            logger.exception("Unexpected error while creating admin notification")
        return None

    # ── Business events ───────────────────────────────────────────

    def notify_user_signup(self, *, user_id: UUID, name: str) -> AdminNotification | None:
        return self.notify_quietly(
            {
                "type": AdminNotificationType.NEW_USER_SIGNUP,
                "priority": AdminNotificationPriority.LOW,
                "title": "New user signed up",
                "message": f"{name} just joined the platform.",
                "link": "/admin/users",
                "actor_id": user_id,
                "target": UserTarget(target_id=user_id),
            }
        )

    def notify_video_upload(
        self, *, video_id: UUID, title: str, uploader_id: UUID, uploader_name: str
    ) -> AdminNotification | None:
        return self.notify_quietly(
            {
                "type": AdminNotificationType.NEW_VIDEO_UPLOAD,
                "title": "New video uploaded",
                "message": f'"{title}" was uploaded by {uploader_name} and awaits review.',
                "link": "/admin/videos",
                "actor_id": uploader_id,
                "target": VideoTarget(target_id=video_id),
            }
        )

    def notify_video_updated(
        self, *, video_id: UUID, title: str, uploader_id: UUID, changed_fields: list[str]
    ) -> AdminNotification | None:
        return self.notify_quietly(
            {
                "type": AdminNotificationType.VIDEO_UPDATED,
                "priority": AdminNotificationPriority.LOW,
                "title": "Video updated",
                "message": f'"{title}" was edited ({", ".join(changed_fields) or "no fields"}).',
                "link": "/admin/videos",
                "actor_id": uploader_id,
                "target": VideoTarget(target_id=video_id),
                "metadata": {"changed_fields": changed_fields},
            }
        )

    def notify_nsfw_flagged(
        self, *, video_id: UUID, title: str, score: float
    ) -> AdminNotification | None:
        return self.notify_quietly(
            {
                "type": AdminNotificationType.NSFW_FLAGGED,
                "priority": AdminNotificationPriority.HIGH,
                "title": "Video flagged as NSFW",
                "message": f'"{title}" was flagged by the NSFW classifier (score {score:.2f}).',
                "link": "/admin/videos",
                "target": VideoTarget(target_id=video_id),
                "metadata": {"nsfw_score": score},
            }
        )

    def notify_new_comment(
        self, *, comment_id: UUID, content: str, author_id: UUID, author_name: str
    ) -> AdminNotification | None:
        return self.notify_quietly(
            {
                "type": AdminNotificationType.NEW_COMMENT,
                "priority": AdminNotificationPriority.LOW,
                "title": "New comment",
                "message": f"{author_name}: {_excerpt(content)}",
                "link": "/admin/comments",
                "actor_id": author_id,
                "target": CommentTarget(target_id=comment_id),
            }
        )

    def notify_toxic_comment(
        self,
        *,
        comment_id: UUID,
        content: str,
        author_id: UUID,
        author_name: str,
        score: float,
        hidden: bool,
    ) -> AdminNotification | None:
        action = "auto-hidden" if hidden else "flagged"
        return self.notify_quietly(
            {
                "type": AdminNotificationType.TOXIC_COMMENT,
                "priority": AdminNotificationPriority.HIGH,
                "title": f"Toxic comment {action}",
                "message": f"{author_name}: {_excerpt(content)}",
                "link": "/admin/comments",
                "actor_id": author_id,
                "target": CommentTarget(target_id=comment_id),
                "metadata": {"toxicity_score": score, "hidden": hidden},
            }
        )

    def notify_new_report(
        self,
        *,
        report_id: UUID,
        target_type: str,
        reason: str,
        reporter_id: UUID | None,
    ) -> AdminNotification | None:
        return self.notify_quietly(
            {
                "type": AdminNotificationType.NEW_REPORT,
                "priority": AdminNotificationPriority.HIGH,
                "title": f"New {target_type.replace('_', ' ')} report",
                "message": reason,
                "link": "/admin/reports",
                "actor_id": reporter_id,
                "target": ReportTarget(target_id=report_id),
                "metadata": {"reported_type": target_type},
            }
        )

    def notify_community_post(
        self, *, post_id: UUID, content: str, author_id: UUID, author_name: str
    ) -> AdminNotification | None:
        return self.notify_quietly(
            {
                "type": AdminNotificationType.NEW_COMMUNITY_POST,
                "priority": AdminNotificationPriority.LOW,
                "title": "New community post",
                "message": f"{author_name}: {_excerpt(content)}",
                "link": "/community",
                "actor_id": author_id,
                "target": CommunityPostTarget(target_id=post_id),
            }
        )


class AdminNotificationService:
    """Read/dismiss state machine behind the admin notification inbox.

    Active-Unread -> Active-Read -> Dismissed; dismissing is allowed from
    either active state and nothing leaves Dismissed.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = AdminNotificationRepository(db)

    def list_notifications(
        self,
        caller: Caller,
        params: AdminNotificationListParams | Mapping[str, Any] | None = None,
    ) -> list[AdminNotification]:
        ensure_staff(caller)
        p = validate_input(AdminNotificationListParams, params)
        with translate_db_errors(self.db):
            return self.repo.get_active(
                limit=p.limit,
                unread_only=p.unread_only,
                priority=None if p.priority == "all" else p.priority,
                type=p.type.value if p.type else None,
            )

    def count_unread(self, caller: Caller) -> NotificationCountResponse:
        ensure_staff(caller)
        with translate_db_errors(self.db):
            count = self.repo.count_unread()
        return NotificationCountResponse(
            unread_count=count,
            poll_interval_seconds=settings.NOTIFICATION_POLL_INTERVAL_SECONDS,
        )

    def mark_read(self, caller: Caller, notification_id: UUID) -> AdminNotification:
        ensure_staff(caller)
        with translate_db_errors(self.db):
            notification = self.repo.mark_as_read(notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        return notification

    def mark_all_read(self, caller: Caller) -> int:
        ensure_staff(caller)
        with translate_db_errors(self.db):
            count = self.repo.mark_all_as_read()
        logger.info("Admin %s marked %d notifications read", caller.user_id, count)
        return count

    def dismiss(self, caller: Caller, notification_id: UUID) -> AdminNotification:
        ensure_staff(caller)
        with translate_db_errors(self.db):
            notification = self.repo.dismiss(notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        return notification

    def dismiss_all_read(self, caller: Caller) -> int:
        ensure_staff(caller)
        with translate_db_errors(self.db):
            count = self.repo.dismiss_all_read()
        logger.info("Admin %s dismissed %d read notifications", caller.user_id, count)
        return count
