"""Repository for AdminNotification persistence and read/dismiss flags."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.notification import AdminNotification


class AdminNotificationRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        *,
        type: str,
        priority: str,
        title: str,
        message: str,
        link: str | None = None,
        actor_id: UUID | None = None,
        target_type: str | None = None,
        target_id: UUID | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> AdminNotification:
        notification = AdminNotification(
            type=type,
            priority=priority,
            title=title,
            message=message,
            link=link,
            actor_id=actor_id,
            target_type=target_type,
            target_id=target_id,
            metadata_=metadata,
            is_read=False,
            is_dismissed=False,
        )
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def get_by_id(self, notification_id: UUID) -> AdminNotification | None:
        return (
            self.db.query(AdminNotification)
            .filter(AdminNotification.id == notification_id)
            .first()
        )

    def get_active(
        self,
        limit: int = 30,
        unread_only: bool = False,
        priority: str | None = None,
        type: str | None = None,
    ) -> list[AdminNotification]:
        """Non-dismissed notifications, newest first."""
        query = self.db.query(AdminNotification).filter(
            AdminNotification.is_dismissed == False  # noqa: E712
        )
        if unread_only:
            query = query.filter(AdminNotification.is_read == False)  # noqa: E712
        if priority is not None:
            query = query.filter(AdminNotification.priority == priority)
        if type is not None:
            query = query.filter(AdminNotification.type == type)
        return (
            query.order_by(AdminNotification.created_at.desc(), AdminNotification.id.desc())
            .limit(limit)
            .all()
        )

    def count_unread(self) -> int:
        return (
            self.db.query(AdminNotification)
            .filter(
                AdminNotification.is_read == False,  # noqa: E712
                AdminNotification.is_dismissed == False,  # noqa: E712
            )
            .count()
        )

    def mark_as_read(self, notification_id: UUID) -> AdminNotification | None:
        notification = self.get_by_id(notification_id)
        if notification is None:
            return None
        if not notification.is_dismissed and not notification.is_read:
            notification.is_read = True  # type: ignore[assignment]
            self.db.commit()
            self.db.refresh(notification)
        return notification

    def mark_all_as_read(self) -> int:
        count = (
            self.db.query(AdminNotification)
            .filter(
                AdminNotification.is_read == False,  # noqa: E712
                AdminNotification.is_dismissed == False,  # noqa: E712
            )
            .update({"is_read": True}, synchronize_session="fetch")
        )
        self.db.commit()
        return count

    def dismiss(self, notification_id: UUID) -> AdminNotification | None:
        notification = self.get_by_id(notification_id)
        if notification is None:
            return None
        if not notification.is_dismissed:
            notification.is_dismissed = True  # type: ignore[assignment]
            self.db.commit()
            self.db.refresh(notification)
        return notification

    def dismiss_all_read(self) -> int:
        count = (
            self.db.query(AdminNotification)
            .filter(
                AdminNotification.is_read == True,  # noqa: E712
                AdminNotification.is_dismissed == False,  # noqa: E712
            )
            .update({"is_dismissed": True}, synchronize_session="fetch")
        )
        self.db.commit()
        return count
