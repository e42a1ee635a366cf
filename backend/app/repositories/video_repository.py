from uuid import UUID

from sqlalchemy.orm import Session

from app.core.identity import ByCanonicalId, EntityRef
from app.core.sorting import apply_order_by
from app.models.user import User
from app.models.video import Video, VideoStatus
from app.repositories.filters import like_pattern
from app.schemas.video import VideoCreate, VideoListParams, VideoUpdate

SORTABLE_FIELDS = ("created_at", "updated_at", "title", "view_count")


class VideoRepository:
    def __init__(self, db: Session):
        self.db = db

    def _ref_filter(self, ref: EntityRef):  # type: ignore[no-untyped-def]
        if isinstance(ref, ByCanonicalId):
            return Video.id == ref.id
        return Video.upload_id == ref.external_id

    def get_by_id(self, video_id: UUID) -> Video | None:
        return self.db.query(Video).filter(Video.id == video_id).first()

    def get_by_ref(self, ref: EntityRef) -> Video | None:
        return self.db.query(Video).filter(self._ref_filter(ref)).first()

    def create(self, data: VideoCreate, user_id: UUID, status: VideoStatus) -> Video:
        video = Video(**data.model_dump(), user_id=user_id, status=status.value)
        self.db.add(video)
        self.db.commit()
        self.db.refresh(video)
        return video

    def update(self, video: Video, data: VideoUpdate) -> Video:
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(video, key, value)
        self.db.commit()
        self.db.refresh(video)
        return video

    def get_all_with_uploader(self, params: VideoListParams) -> tuple[list[tuple[Video, User]], int]:
        query = self.db.query(Video, User).join(User, Video.user_id == User.id)
        if params.status != "all":
            query = query.filter(Video.status == params.status)
        if params.search:
            query = query.filter(Video.title.ilike(like_pattern(params.search), escape="\\"))

        total = query.count()
        query = apply_order_by(query, Video, params.order_by, allowed_fields=SORTABLE_FIELDS)
        rows = query.offset(params.offset).limit(params.limit).all()
        return [(video, user) for video, user in rows], total

    def get_pending_with_uploader(self, limit: int) -> list[tuple[Video, User]]:
        rows = (
            self.db.query(Video, User)
            .join(User, Video.user_id == User.id)
            .filter(Video.status == VideoStatus.PENDING.value)
            .order_by(Video.created_at.desc())
            .limit(limit)
            .all()
        )
        return [(video, user) for video, user in rows]

    def get_nsfw_with_uploader(self, limit: int) -> list[tuple[Video, User]]:
        rows = (
            self.db.query(Video, User)
            .join(User, Video.user_id == User.id)
            .filter(Video.is_nsfw == True)  # noqa: E712
            .order_by(Video.created_at.desc())
            .limit(limit)
            .all()
        )
        return [(video, user) for video, user in rows]

    def count_published_by_user(self, user_id: UUID) -> int:
        return (
            self.db.query(Video)
            .filter(Video.user_id == user_id, Video.status == VideoStatus.PUBLISHED.value)
            .count()
        )

    def update_by_ref(self, ref: EntityRef, values: dict[str, object]) -> Video | None:
        count = (
            self.db.query(Video)
            .filter(self._ref_filter(ref))
            .update(values, synchronize_session="fetch")
        )
        self.db.commit()
        if count == 0:
            return None
        return self.get_by_ref(ref)

    def delete_by_ref(self, ref: EntityRef) -> bool:
        video = self.get_by_ref(ref)
        if not video:
            return False
        self.db.delete(video)
        self.db.commit()
        return True
