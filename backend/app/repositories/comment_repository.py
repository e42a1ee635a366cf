from uuid import UUID

from sqlalchemy.orm import Session

from app.models.comment import Comment
from app.models.user import User
from app.models.video import Video
from app.repositories.filters import like_pattern

CommentRow = tuple[Comment, User, Video]


class CommentRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, comment_id: UUID) -> Comment | None:
        return self.db.query(Comment).filter(Comment.id == comment_id).first()

    def create(
        self,
        *,
        user_id: UUID,
        video_id: UUID,
        content: str,
        toxicity_score: float = 0,
        is_toxic: bool = False,
        is_hidden: bool = False,
    ) -> Comment:
        comment = Comment(
            user_id=user_id,
            video_id=video_id,
            content=content,
            toxicity_score=toxicity_score,
            is_toxic=is_toxic,
            is_hidden=is_hidden,
        )
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def _with_context(self):  # type: ignore[no-untyped-def]
        return (
            self.db.query(Comment, User, Video)
            .join(User, Comment.user_id == User.id)
            .join(Video, Comment.video_id == Video.id)
        )

    def _page(self, query, skip: int, limit: int) -> tuple[list[CommentRow], int]:  # type: ignore[no-untyped-def]
        total = query.count()
        rows = (
            query.order_by(Comment.created_at.desc(), Comment.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [(c, u, v) for c, u, v in rows], total

    def get_all(
        self, skip: int = 0, limit: int = 50, search: str | None = None
    ) -> tuple[list[CommentRow], int]:
        query = self._with_context()
        if search:
            query = query.filter(Comment.content.ilike(like_pattern(search), escape="\\"))
        return self._page(query, skip, limit)

    def get_toxic(self, skip: int = 0, limit: int = 100) -> tuple[list[CommentRow], int]:
        query = self._with_context().filter(Comment.is_toxic == True)  # noqa: E712
        return self._page(query, skip, limit)

    def get_hidden(self, skip: int = 0, limit: int = 100) -> tuple[list[CommentRow], int]:
        query = self._with_context().filter(Comment.is_hidden == True)  # noqa: E712
        return self._page(query, skip, limit)

    def update_fields(self, comment_id: UUID, values: dict[str, object]) -> Comment | None:
        """Single UPDATE statement so every field changes together."""
        count = (
            self.db.query(Comment)
            .filter(Comment.id == comment_id)
            .update(values, synchronize_session="fetch")
        )
        self.db.commit()
        if count == 0:
            return None
        return self.get_by_id(comment_id)

    def delete(self, comment_id: UUID) -> bool:
        count = self.db.query(Comment).filter(Comment.id == comment_id).delete()
        self.db.commit()
        return count > 0
