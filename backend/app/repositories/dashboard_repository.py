from sqlalchemy import func as sa_func
from sqlalchemy.orm import Session

from app.models.comment import Comment
from app.models.user import User
from app.models.video import Video, VideoStatus


class DashboardRepository:
    """Headline counters for the moderation console."""

    def __init__(self, db: Session):
        self.db = db

    def count_users(self) -> int:
        return self.db.query(sa_func.count(User.id)).scalar() or 0

    def count_banned_users(self) -> int:
        return (
            self.db.query(sa_func.count(User.id))
            .filter(User.is_banned == True)  # noqa: E712
            .scalar()
            or 0
        )

    def count_videos(self) -> int:
        return self.db.query(sa_func.count(Video.id)).scalar() or 0

    def count_pending_videos(self) -> int:
        return (
            self.db.query(sa_func.count(Video.id))
            .filter(Video.status == VideoStatus.PENDING.value)
            .scalar()
            or 0
        )

    def count_nsfw_videos(self) -> int:
        return (
            self.db.query(sa_func.count(Video.id))
            .filter(Video.is_nsfw == True)  # noqa: E712
            .scalar()
            or 0
        )

    def sum_views(self) -> int:
        result = self.db.query(sa_func.coalesce(sa_func.sum(Video.view_count), 0)).scalar() or 0
        return int(result)

    def count_comments(self) -> int:
        return self.db.query(sa_func.count(Comment.id)).scalar() or 0

    def count_toxic_comments(self) -> int:
        return (
            self.db.query(sa_func.count(Comment.id))
            .filter(Comment.is_toxic == True)  # noqa: E712
            .scalar()
            or 0
        )

    def count_hidden_comments(self) -> int:
        return (
            self.db.query(sa_func.count(Comment.id))
            .filter(Comment.is_hidden == True)  # noqa: E712
            .scalar()
            or 0
        )
