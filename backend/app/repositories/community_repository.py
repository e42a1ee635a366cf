from uuid import UUID

from sqlalchemy import case
from sqlalchemy.orm import Session

from app.models.community import CommunityPost, PollOption, PollVote, PostComment, PostLike
from app.models.user import User


class CommunityRepository:
    def __init__(self, db: Session):
        self.db = db

    def _bump(self, post_id: UUID, column: str, step: int) -> None:
        counter = getattr(CommunityPost, column)
        value = counter + step if step > 0 else case((counter + step > 0, counter + step), else_=0)
        self.db.query(CommunityPost).filter(CommunityPost.id == post_id).update(
            {column: value}, synchronize_session="fetch"
        )

    # ── Posts ─────────────────────────────────────────────────────

    def create_post(
        self,
        *,
        user_id: UUID,
        type: str,
        content: str,
        image_url: str | None = None,
        poll_options: list[str] | None = None,
    ) -> CommunityPost:
        post = CommunityPost(user_id=user_id, type=type, content=content, image_url=image_url)
        self.db.add(post)
        self.db.flush()
        for position, text in enumerate(poll_options or []):
            self.db.add(PollOption(post_id=post.id, text=text, position=position))
        self.db.commit()
        self.db.refresh(post)
        return post

    def get_post(self, post_id: UUID) -> CommunityPost | None:
        return self.db.query(CommunityPost).filter(CommunityPost.id == post_id).first()

    def get_feed(
        self, skip: int = 0, limit: int = 20, user_id: UUID | None = None
    ) -> list[tuple[CommunityPost, User]]:
        query = self.db.query(CommunityPost, User).join(User, CommunityPost.user_id == User.id)
        if user_id is not None:
            query = query.filter(CommunityPost.user_id == user_id)
        rows = (
            query.order_by(CommunityPost.created_at.desc(), CommunityPost.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [(post, user) for post, user in rows]

    def delete_post(self, post: CommunityPost) -> None:
        post_id = post.id
        self.db.query(PollVote).filter(PollVote.post_id == post_id).delete()
        self.db.query(PollOption).filter(PollOption.post_id == post_id).delete()
        self.db.query(PostLike).filter(PostLike.post_id == post_id).delete()
        self.db.query(PostComment).filter(PostComment.post_id == post_id).delete()
        self.db.delete(post)
        self.db.commit()

    # ── Polls ─────────────────────────────────────────────────────

    def get_options(self, post_ids: list[UUID]) -> dict[UUID, list[PollOption]]:
        if not post_ids:
            return {}
        grouped: dict[UUID, list[PollOption]] = {}
        options = (
            self.db.query(PollOption)
            .filter(PollOption.post_id.in_(post_ids))
            .order_by(PollOption.position.asc())
            .all()
        )
        for option in options:
            grouped.setdefault(option.post_id, []).append(option)  # type: ignore[arg-type]
        return grouped

    def get_option(self, post_id: UUID, option_id: UUID) -> PollOption | None:
        return (
            self.db.query(PollOption)
            .filter(PollOption.id == option_id, PollOption.post_id == post_id)
            .first()
        )

    def get_vote(self, post_id: UUID, user_id: UUID) -> PollVote | None:
        return (
            self.db.query(PollVote)
            .filter(PollVote.post_id == post_id, PollVote.user_id == user_id)
            .first()
        )

    def add_vote(self, post_id: UUID, option_id: UUID, user_id: UUID) -> PollVote:
        vote = PollVote(post_id=post_id, option_id=option_id, user_id=user_id)
        self.db.add(vote)
        self.db.query(PollOption).filter(PollOption.id == option_id).update(
            {"vote_count": PollOption.vote_count + 1}, synchronize_session="fetch"
        )
        self.db.commit()
        self.db.refresh(vote)
        return vote

    # ── Likes ─────────────────────────────────────────────────────

    def get_like(self, post_id: UUID, user_id: UUID) -> PostLike | None:
        return (
            self.db.query(PostLike)
            .filter(PostLike.post_id == post_id, PostLike.user_id == user_id)
            .first()
        )

    def add_like(self, post: CommunityPost, user_id: UUID) -> None:
        self.db.add(PostLike(post_id=post.id, user_id=user_id))
        self._bump(post.id, "like_count", 1)  # type: ignore[arg-type]
        self.db.commit()

    def remove_like(self, post: CommunityPost, like: PostLike) -> None:
        self.db.delete(like)
        self._bump(post.id, "like_count", -1)  # type: ignore[arg-type]
        self.db.commit()

    # ── Comments ──────────────────────────────────────────────────

    def add_comment(self, post: CommunityPost, user_id: UUID, content: str) -> PostComment:
        comment = PostComment(post_id=post.id, user_id=user_id, content=content)
        self.db.add(comment)
        self._bump(post.id, "comment_count", 1)  # type: ignore[arg-type]
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def get_comment(self, comment_id: UUID) -> PostComment | None:
        return self.db.query(PostComment).filter(PostComment.id == comment_id).first()

    def get_comments(
        self, post_id: UUID, skip: int = 0, limit: int = 50
    ) -> list[tuple[PostComment, User]]:
        rows = (
            self.db.query(PostComment, User)
            .join(User, PostComment.user_id == User.id)
            .filter(PostComment.post_id == post_id)
            .order_by(PostComment.created_at.desc(), PostComment.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [(comment, user) for comment, user in rows]

    def delete_comment(self, comment: PostComment) -> None:
        self._bump(comment.post_id, "comment_count", -1)  # type: ignore[arg-type]
        self.db.delete(comment)
        self.db.commit()
