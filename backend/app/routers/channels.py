from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth import Caller, get_current_caller
from app.core.database import get_db
from app.schemas.channel import (
    ChannelProfileResponse,
    SubscriberCountResponse,
    SubscriptionStatusResponse,
)
from app.schemas.community import PostResponse
from app.services.channel_service import ChannelService
from app.services.community_service import CommunityService

router = APIRouter()


@router.get(
    "/{user_ref}",
    response_model=ChannelProfileResponse,
    summary="Get a channel profile",
    responses={404: {"description": "Channel not found"}},
)
async def get_profile(user_ref: str, db: Session = Depends(get_db)) -> ChannelProfileResponse:
    """Look up a channel by user id or external id."""
    return ChannelService(db).get_profile(user_ref)


@router.get(
    "/{user_id}/posts",
    response_model=list[PostResponse],
    summary="List a channel's community posts",
    responses={404: {"description": "Channel not found"}},
)
async def get_channel_posts(
    user_id: UUID,
    limit: int = Query(default=20, ge=1, le=50),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> list[PostResponse]:
    return CommunityService(db).get_by_channel(user_id, {"limit": limit, "offset": offset})


@router.get(
    "/{creator_id}/subscribers",
    response_model=SubscriberCountResponse,
    summary="Count a channel's subscribers",
)
async def get_subscriber_count(
    creator_id: UUID, db: Session = Depends(get_db)
) -> SubscriberCountResponse:
    count = ChannelService(db).subscriber_count(creator_id)
    return SubscriberCountResponse(creator_id=creator_id, subscriber_count=count)


@router.post(
    "/{creator_id}/subscribe",
    response_model=SubscriptionStatusResponse,
    summary="Subscribe or unsubscribe",
    responses={
        401: {"description": "Unauthorized – invalid or missing token"},
        404: {"description": "Channel not found"},
        422: {"description": "Cannot subscribe to yourself"},
    },
)
async def toggle_subscription(
    creator_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> SubscriptionStatusResponse:
    return ChannelService(db).toggle_subscription(caller, creator_id)


@router.get(
    "/{creator_id}/subscription",
    response_model=SubscriptionStatusResponse,
    summary="Check whether the caller is subscribed",
    responses={401: {"description": "Unauthorized – invalid or missing token"}},
)
async def is_subscribed(
    creator_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> SubscriptionStatusResponse:
    return ChannelService(db).is_subscribed(caller, creator_id)
