"""Bounded, time-windowed source queries feeding the moderation timeline.

Every query filters on its own timestamp column, orders newest first and is
capped at ``limit`` rows, so no source is ever scanned unbounded.
"""

from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.models.comment import Comment
from app.models.report import Report
from app.models.user import User
from app.models.video import Video, VideoStatus


class ActivityRepository:
    def __init__(self, db: Session):
        self.db = db

    def recent_bans(self, since: datetime, limit: int) -> list[Any]:
        return (
            self.db.query(User.id, User.name, User.ban_reason, User.updated_at)
            .filter(User.is_banned == True, User.updated_at >= since)  # noqa: E712
            .order_by(User.updated_at.desc())
            .limit(limit)
            .all()
        )

    def recent_reports(self, since: datetime, limit: int) -> list[Any]:
        return (
            self.db.query(
                Report.id,
                Report.target_type,
                Report.reason,
                Report.status,
                Report.created_at,
                User.name.label("reporter_name"),
            )
            .outerjoin(User, Report.reporter_id == User.id)
            .filter(Report.created_at >= since)
            .order_by(Report.created_at.desc())
            .limit(limit)
            .all()
        )

    def recent_toxic_comments(self, since: datetime, limit: int) -> list[Any]:
        return (
            self.db.query(
                Comment.id,
                Comment.content,
                Comment.toxicity_score,
                Comment.created_at,
                User.name.label("user_name"),
            )
            .outerjoin(User, Comment.user_id == User.id)
            .filter(Comment.is_toxic == True, Comment.created_at >= since)  # noqa: E712
            .order_by(Comment.created_at.desc())
            .limit(limit)
            .all()
        )

    def recent_pending_videos(self, since: datetime, limit: int) -> list[Any]:
        return (
            self.db.query(Video.id, Video.title, Video.created_at, User.name.label("user_name"))
            .outerjoin(User, Video.user_id == User.id)
            .filter(Video.status == VideoStatus.PENDING.value, Video.created_at >= since)
            .order_by(Video.created_at.desc())
            .limit(limit)
            .all()
        )

    def recent_nsfw_videos(self, since: datetime, limit: int) -> list[Any]:
        return (
            self.db.query(
                Video.id,
                Video.title,
                Video.nsfw_score,
                Video.updated_at,
                User.name.label("user_name"),
            )
            .outerjoin(User, Video.user_id == User.id)
            .filter(Video.is_nsfw == True, Video.updated_at >= since)  # noqa: E712
            .order_by(Video.updated_at.desc())
            .limit(limit)
            .all()
        )

    def recent_signups(self, since: datetime, limit: int) -> list[Any]:
        return (
            self.db.query(User.id, User.name, User.created_at)
            .filter(User.created_at >= since)
            .order_by(User.created_at.desc())
            .limit(limit)
            .all()
        )
