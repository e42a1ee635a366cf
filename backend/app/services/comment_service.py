from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.core.auth import Caller, ensure_can_post
from app.core.config import settings
from app.core.database import translate_db_errors
from app.core.errors import NotFoundError, validate_input
from app.models.comment import Comment
from app.repositories.comment_repository import CommentRepository
from app.repositories.user_repository import UserRepository
from app.repositories.video_repository import VideoRepository
from app.schemas.comment import CommentCreate
from app.services.notification_service import AdminNotifier


class CommentService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CommentRepository(db)
        self.videos = VideoRepository(db)
        self.users = UserRepository(db)
        self.notifier = AdminNotifier(db)

    def create(self, caller: Caller | None, data: CommentCreate | Mapping[str, Any]) -> Comment:
        """Post a comment and route it to moderators by toxicity score.

        Scores at or above the flag threshold mark the comment toxic; at or
        above the hide threshold it is also hidden from viewers.
        """
        caller = ensure_can_post(caller)
        params = validate_input(CommentCreate, data)
        is_toxic = params.toxicity_score >= settings.TOXICITY_FLAG_THRESHOLD
        is_hidden = params.toxicity_score >= settings.TOXICITY_HIDE_THRESHOLD

        with translate_db_errors(self.db):
            if self.videos.get_by_id(params.video_id) is None:
                raise NotFoundError("Video not found")
            comment = self.repo.create(
                user_id=caller.user_id,
                video_id=params.video_id,
                content=params.content,
                toxicity_score=params.toxicity_score,
                is_toxic=is_toxic,
                is_hidden=is_hidden,
            )
            author = self.users.get_by_id(caller.user_id)

        author_name = str(author.name) if author else caller.external_id
        if is_toxic:
            self.notifier.notify_toxic_comment(
                comment_id=comment.id,  # type: ignore[arg-type]
                content=params.content,
                author_id=caller.user_id,
                author_name=author_name,
                score=params.toxicity_score,
                hidden=is_hidden,
            )
        else:
            self.notifier.notify_new_comment(
                comment_id=comment.id,  # type: ignore[arg-type]
                content=params.content,
                author_id=caller.user_id,
                author_name=author_name,
            )
        return comment
