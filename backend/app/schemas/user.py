from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.user import UserRole


class UserSignUp(BaseModel):
    external_id: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    image_url: str | None = Field(default=None, max_length=2048)


class UserResponse(BaseModel):
    id: UUID
    external_id: str
    name: str
    image_url: str | None
    role: str
    is_banned: bool
    ban_reason: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    id: UUID
    name: str
    image_url: str | None = None

    model_config = {"from_attributes": True}


class UserListParams(BaseModel):
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    search: str | None = Field(default=None, max_length=255)
    role: Literal["all", "user", "admin", "moderator"] = "all"
    banned: Literal["all", "banned", "active"] = "all"
    order_by: str | None = None


class UserListResponse(BaseModel):
    items: list[UserResponse]
    total: int


class BanUserRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)


class UpdateUserRoleRequest(BaseModel):
    role: UserRole


class SignUpRequest(BaseModel):
    """Profile fields sent by the client; the external id comes from the token."""

    name: str = Field(..., min_length=1, max_length=255)
    image_url: str | None = Field(default=None, max_length=2048)
