from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class VideoStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    PUBLISHED = "published"
    REJECTED = "rejected"


class VideoVisibility(str, Enum):
    PRIVATE = "private"
    PUBLIC = "public"


class Video(Base):
    __tablename__ = "videos"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Asset identifier assigned by the upload provider
    upload_id = Column(String(255), unique=True, index=True, nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    thumbnail_url = Column(String(2048), nullable=True)
    status = Column(String(20), nullable=False, default=VideoStatus.DRAFT.value, index=True)
    visibility = Column(String(20), nullable=False, default=VideoVisibility.PRIVATE.value)
    view_count = Column(Integer, nullable=False, default=0)
    is_nsfw = Column(Boolean, nullable=False, default=False, index=True)
    nsfw_score = Column(Float, nullable=True)
    rejection_reason = Column(String(1000), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
