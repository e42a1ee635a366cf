from enum import Enum

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class PostType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    POLL = "poll"


class CommunityPost(Base):
    __tablename__ = "community_posts"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(String(20), nullable=False, default=PostType.TEXT.value)
    content = Column(Text, nullable=False)
    image_url = Column(String(2048), nullable=True)
    like_count = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)


class PollOption(Base):
    __tablename__ = "community_poll_options"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    post_id = Column(
        UUIDType,
        ForeignKey("community_posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text = Column(String(200), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    vote_count = Column(Integer, nullable=False, default=0)


class PollVote(Base):
    __tablename__ = "community_poll_votes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_poll_vote_post_user"),)

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    post_id = Column(
        UUIDType,
        ForeignKey("community_posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    option_id = Column(
        UUIDType,
        ForeignKey("community_poll_options.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id = Column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class PostLike(Base):
    __tablename__ = "community_post_likes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_like_post_user"),)

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    post_id = Column(
        UUIDType,
        ForeignKey("community_posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class PostComment(Base):
    __tablename__ = "community_post_comments"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    post_id = Column(
        UUIDType,
        ForeignKey("community_posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
