"""Community posts, polls, likes and post comments."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth import Caller, ensure_authenticated, ensure_can_post
from app.core.database import translate_db_errors
from app.core.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
    validate_input,
)
from app.models.community import CommunityPost, PostComment, PostType
from app.models.user import User
from app.repositories.community_repository import CommunityRepository
from app.repositories.user_repository import UserRepository
from app.schemas.community import (
    FeedParams,
    LikeStatusResponse,
    PollOptionResponse,
    PostCommentCreate,
    PostCommentListParams,
    PostCommentResponse,
    PostCreate,
    PostResponse,
    VoteStatusResponse,
)
from app.schemas.user import UserSummary
from app.services.notification_service import AdminNotifier


def _can_manage(caller: Caller, owner_id: UUID) -> bool:
    return caller.is_staff or caller.user_id == owner_id


class CommunityService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CommunityRepository(db)
        self.users = UserRepository(db)
        self.notifier = AdminNotifier(db)

    def _to_responses(self, rows: list[tuple[CommunityPost, User | None]]) -> list[PostResponse]:
        options = self.repo.get_options([post.id for post, _ in rows])  # type: ignore[misc]
        return [
            PostResponse(
                id=post.id,
                user_id=post.user_id,
                type=post.type,
                content=post.content,
                image_url=post.image_url,
                like_count=post.like_count,
                comment_count=post.comment_count,
                created_at=post.created_at,
                user=UserSummary.model_validate(user) if user else None,
                poll_options=[
                    PollOptionResponse.model_validate(o) for o in options.get(post.id, [])  # type: ignore[call-overload]
                ],
            )
            for post, user in rows
        ]

    def _get_post(self, post_id: UUID) -> CommunityPost:
        post = self.repo.get_post(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    # ── Posts ─────────────────────────────────────────────────────

    def create_post(
        self, caller: Caller | None, data: PostCreate | Mapping[str, Any]
    ) -> PostResponse:
        caller = ensure_can_post(caller)
        params = validate_input(PostCreate, data)
        with translate_db_errors(self.db):
            post = self.repo.create_post(
                user_id=caller.user_id,
                type=params.type.value,
                content=params.content,
                image_url=params.image_url,
                poll_options=params.poll_options,
            )
            author = self.users.get_by_id(caller.user_id)
            response = self._to_responses([(post, author)])[0]

        self.notifier.notify_community_post(
            post_id=response.id,
            content=params.content,
            author_id=caller.user_id,
            author_name=author.name if author else caller.external_id,  # type: ignore[arg-type]
        )
        return response

    def get_post(self, post_id: UUID) -> PostResponse:
        with translate_db_errors(self.db):
            post = self._get_post(post_id)
            author = self.users.get_by_id(post.user_id)  # type: ignore[arg-type]
            return self._to_responses([(post, author)])[0]

    def get_feed(self, params: FeedParams | Mapping[str, Any] | None = None) -> list[PostResponse]:
        p = validate_input(FeedParams, params)
        with translate_db_errors(self.db):
            rows = self.repo.get_feed(skip=p.offset, limit=p.limit)
            return self._to_responses(rows)  # type: ignore[arg-type]

    def get_by_channel(
        self, user_id: UUID, params: FeedParams | Mapping[str, Any] | None = None
    ) -> list[PostResponse]:
        p = validate_input(FeedParams, params)
        with translate_db_errors(self.db):
            if self.users.get_by_id(user_id) is None:
                raise NotFoundError("User not found")
            rows = self.repo.get_feed(skip=p.offset, limit=p.limit, user_id=user_id)
            return self._to_responses(rows)  # type: ignore[arg-type]

    def delete_post(self, caller: Caller | None, post_id: UUID) -> None:
        caller = ensure_authenticated(caller)
        with translate_db_errors(self.db):
            post = self._get_post(post_id)
            if not _can_manage(caller, post.user_id):  # type: ignore[arg-type]
                raise AuthorizationError("Only the author or staff can delete this post")
            self.repo.delete_post(post)

    # ── Polls ─────────────────────────────────────────────────────

    def vote(self, caller: Caller | None, post_id: UUID, option_id: UUID) -> VoteStatusResponse:
        caller = ensure_can_post(caller)
        with translate_db_errors(self.db):
            post = self._get_post(post_id)
            if post.type != PostType.POLL.value:
                raise ValidationError("Only poll posts accept votes")
            if self.repo.get_option(post_id, option_id) is None:
                raise NotFoundError("Poll option not found")
            if self.repo.get_vote(post_id, caller.user_id) is not None:
                raise ConflictError("You have already voted on this poll")
            try:
                self.repo.add_vote(post_id, option_id, caller.user_id)
            except IntegrityError:
                self.db.rollback()
                raise ConflictError("You have already voted on this poll") from None
        return VoteStatusResponse(has_voted=True, option_id=option_id)

    def has_voted(self, caller: Caller | None, post_id: UUID) -> VoteStatusResponse:
        caller = ensure_authenticated(caller)
        with translate_db_errors(self.db):
            vote = self.repo.get_vote(post_id, caller.user_id)
        if vote is None:
            return VoteStatusResponse(has_voted=False)
        return VoteStatusResponse(has_voted=True, option_id=vote.option_id)  # type: ignore[arg-type]

    # ── Likes ─────────────────────────────────────────────────────

    def toggle_like(self, caller: Caller | None, post_id: UUID) -> LikeStatusResponse:
        caller = ensure_can_post(caller)
        with translate_db_errors(self.db):
            post = self._get_post(post_id)
            like = self.repo.get_like(post_id, caller.user_id)
            if like is None:
                self.repo.add_like(post, caller.user_id)
                liked = True
            else:
                self.repo.remove_like(post, like)
                liked = False
            self.db.refresh(post)
            return LikeStatusResponse(liked=liked, like_count=post.like_count)  # type: ignore[arg-type]

    def has_liked(self, caller: Caller | None, post_id: UUID) -> LikeStatusResponse:
        caller = ensure_authenticated(caller)
        with translate_db_errors(self.db):
            post = self._get_post(post_id)
            liked = self.repo.get_like(post_id, caller.user_id) is not None
            return LikeStatusResponse(liked=liked, like_count=post.like_count)  # type: ignore[arg-type]

    # ── Comments ──────────────────────────────────────────────────

    def add_comment(
        self, caller: Caller | None, post_id: UUID, data: PostCommentCreate | Mapping[str, Any]
    ) -> PostComment:
        caller = ensure_can_post(caller)
        params = validate_input(PostCommentCreate, data)
        with translate_db_errors(self.db):
            post = self._get_post(post_id)
            return self.repo.add_comment(post, caller.user_id, params.content)

    def get_comments(
        self, post_id: UUID, params: PostCommentListParams | Mapping[str, Any] | None = None
    ) -> list[PostCommentResponse]:
        p = validate_input(PostCommentListParams, params)
        with translate_db_errors(self.db):
            self._get_post(post_id)
            rows = self.repo.get_comments(post_id, skip=p.offset, limit=p.limit)
        return [
            PostCommentResponse(
                id=comment.id,
                post_id=comment.post_id,
                user_id=comment.user_id,
                content=comment.content,
                created_at=comment.created_at,
                user=UserSummary.model_validate(user),
            )
            for comment, user in rows
        ]

    def delete_comment(self, caller: Caller | None, comment_id: UUID) -> None:
        caller = ensure_authenticated(caller)
        with translate_db_errors(self.db):
            comment = self.repo.get_comment(comment_id)
            if comment is None:
                raise NotFoundError("Comment not found")
            if not _can_manage(caller, comment.user_id):  # type: ignore[arg-type]
                raise AuthorizationError("Only the author or staff can delete this comment")
            self.repo.delete_comment(comment)
