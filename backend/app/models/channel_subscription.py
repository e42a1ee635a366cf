from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class ChannelSubscription(Base):
    __tablename__ = "channel_subscriptions"
    __table_args__ = (
        UniqueConstraint("viewer_id", "creator_id", name="uq_channel_subscription"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    viewer_id = Column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    creator_id = Column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
