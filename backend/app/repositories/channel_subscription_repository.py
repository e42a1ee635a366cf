from uuid import UUID

from sqlalchemy.orm import Session

from app.models.channel_subscription import ChannelSubscription


class ChannelSubscriptionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, viewer_id: UUID, creator_id: UUID) -> ChannelSubscription | None:
        return (
            self.db.query(ChannelSubscription)
            .filter(
                ChannelSubscription.viewer_id == viewer_id,
                ChannelSubscription.creator_id == creator_id,
            )
            .first()
        )

    def create(self, viewer_id: UUID, creator_id: UUID) -> ChannelSubscription:
        subscription = ChannelSubscription(viewer_id=viewer_id, creator_id=creator_id)
        self.db.add(subscription)
        self.db.commit()
        self.db.refresh(subscription)
        return subscription

    def delete(self, subscription: ChannelSubscription) -> None:
        self.db.delete(subscription)
        self.db.commit()

    def count_subscribers(self, creator_id: UUID) -> int:
        return (
            self.db.query(ChannelSubscription)
            .filter(ChannelSubscription.creator_id == creator_id)
            .count()
        )
