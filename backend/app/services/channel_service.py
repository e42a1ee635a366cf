from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from app.core.auth import Caller, ensure_authenticated
from app.core.database import translate_db_errors
from app.core.errors import NotFoundError, ValidationError
from app.core.identity import resolve_ref
from app.repositories.channel_subscription_repository import ChannelSubscriptionRepository
from app.repositories.user_repository import UserRepository
from app.repositories.video_repository import VideoRepository
from app.schemas.channel import ChannelProfileResponse, SubscriptionStatusResponse
from app.schemas.user import UserSummary
from app.services.community_service import CommunityService

PROFILE_POST_LIMIT = 10


class ChannelService:
    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.videos = VideoRepository(db)
        self.subscriptions = ChannelSubscriptionRepository(db)

    def get_profile(self, user_ref: str | UUID) -> ChannelProfileResponse:
        with translate_db_errors(self.db):
            user = self.users.get_by_ref(resolve_ref(user_ref))
            if user is None:
                raise NotFoundError("Channel not found")
            video_count = self.videos.count_published_by_user(user.id)  # type: ignore[arg-type]
            subscriber_count = self.subscriptions.count_subscribers(user.id)  # type: ignore[arg-type]
        posts = CommunityService(self.db).get_by_channel(
            user.id, {"limit": PROFILE_POST_LIMIT}  # type: ignore[arg-type]
        )
        return ChannelProfileResponse(
            user=UserSummary.model_validate(user),
            video_count=video_count,
            subscriber_count=subscriber_count,
            community_posts=posts,
        )

    def toggle_subscription(
        self, caller: Caller | None, creator_id: UUID
    ) -> SubscriptionStatusResponse:
        caller = ensure_authenticated(caller)
        if caller.user_id == creator_id:
            raise ValidationError("You cannot subscribe to your own channel")
        with translate_db_errors(self.db):
            if self.users.get_by_id(creator_id) is None:
                raise NotFoundError("Channel not found")
            existing = self.subscriptions.get(caller.user_id, creator_id)
            if existing is None:
                self.subscriptions.create(caller.user_id, creator_id)
            else:
                self.subscriptions.delete(existing)
            count = self.subscriptions.count_subscribers(creator_id)
        return SubscriptionStatusResponse(
            creator_id=creator_id, subscribed=existing is None, subscriber_count=count
        )

    def subscriber_count(self, creator_id: UUID) -> int:
        with translate_db_errors(self.db):
            return self.subscriptions.count_subscribers(creator_id)

    def is_subscribed(self, caller: Caller | None, creator_id: UUID) -> SubscriptionStatusResponse:
        caller = ensure_authenticated(caller)
        with translate_db_errors(self.db):
            subscribed = self.subscriptions.get(caller.user_id, creator_id) is not None
            count = self.subscriptions.count_subscribers(creator_id)
        return SubscriptionStatusResponse(
            creator_id=creator_id, subscribed=subscribed, subscriber_count=count
        )
