from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.auth import Caller, ensure_can_post
from app.core.config import settings
from app.core.database import translate_db_errors
from app.core.errors import AuthorizationError, ConflictError, NotFoundError, validate_input
from app.core.identity import ByCanonicalId, ByExternalId
from app.models.video import Video, VideoStatus
from app.repositories.user_repository import UserRepository
from app.repositories.video_repository import VideoRepository
from app.schemas.video import ClassifierScore, VideoCreate, VideoUpdate
from app.services.notification_service import AdminNotifier

logger = logging.getLogger(__name__)


class VideoService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = VideoRepository(db)
        self.users = UserRepository(db)
        self.notifier = AdminNotifier(db)

    def upload(self, caller: Caller | None, data: VideoCreate | Mapping[str, Any]) -> Video:
        """Register an uploaded video. New videos wait in ``pending`` for review."""
        caller = ensure_can_post(caller)
        params = validate_input(VideoCreate, data)
        with translate_db_errors(self.db):
            if params.upload_id and self.repo.get_by_ref(ByExternalId(params.upload_id)):
                raise ConflictError(f"Upload {params.upload_id} is already registered")
            video = self.repo.create(params, user_id=caller.user_id, status=VideoStatus.PENDING)
            uploader = self.users.get_by_id(caller.user_id)

        self.notifier.notify_video_upload(
            video_id=video.id,  # type: ignore[arg-type]
            title=str(video.title),
            uploader_id=caller.user_id,
            uploader_name=str(uploader.name) if uploader else caller.external_id,
        )
        return video

    def update(
        self, caller: Caller | None, video_id: UUID, data: VideoUpdate | Mapping[str, Any]
    ) -> Video:
        caller = ensure_can_post(caller)
        params = validate_input(VideoUpdate, data)
        with translate_db_errors(self.db):
            video = self.repo.get_by_id(video_id)
            if video is None:
                raise NotFoundError("Video not found")
            if video.user_id != caller.user_id:
                raise AuthorizationError("Only the owner can edit this video")
            changed = sorted(params.model_dump(exclude_unset=True))
            video = self.repo.update(video, params)

        self.notifier.notify_video_updated(
            video_id=video.id,  # type: ignore[arg-type]
            title=str(video.title),
            uploader_id=caller.user_id,
            changed_fields=changed,
        )
        return video

    def record_nsfw_score(self, video_id: UUID, score: float) -> Video:
        """Store the NSFW classifier result; high scores flag the video."""
        params = validate_input(ClassifierScore, {"score": score})
        flagged = params.score >= settings.NSFW_FLAG_THRESHOLD
        values: dict[str, object] = {"nsfw_score": params.score}
        if flagged:
            values["is_nsfw"] = True
        with translate_db_errors(self.db):
            video = self.repo.update_by_ref(ByCanonicalId(video_id), values)
        if video is None:
            raise NotFoundError("Video not found")

        if flagged:
            logger.info("Video %s flagged NSFW (score %.2f)", video.id, params.score)
            self.notifier.notify_nsfw_flagged(
                video_id=video.id,  # type: ignore[arg-type]
                title=str(video.title),
                score=params.score,
            )
        return video
