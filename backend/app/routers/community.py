from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth import Caller, get_current_caller
from app.core.database import get_db
from app.schemas.community import (
    LikeStatusResponse,
    PostCommentCreate,
    PostCommentResponse,
    PostCreate,
    PostResponse,
    VoteRequest,
    VoteStatusResponse,
)
from app.services.community_service import CommunityService

router = APIRouter()

AUTH_REQUIRED = {401: {"description": "Unauthorized – invalid or missing token"}}


@router.get("/", response_model=list[PostResponse], summary="Community feed")
async def get_feed(
    limit: int = Query(default=20, ge=1, le=50),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> list[PostResponse]:
    """Newest posts across every channel."""
    return CommunityService(db).get_feed({"limit": limit, "offset": offset})


@router.post(
    "/",
    response_model=PostResponse,
    status_code=201,
    summary="Create a community post",
    responses={
        **AUTH_REQUIRED,
        403: {"description": "Banned users cannot post"},
        422: {"description": "Validation error"},
    },
)
async def create_post(
    data: PostCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> PostResponse:
    """Create a text, image or poll post. Polls take 2 to 6 options."""
    return CommunityService(db).create_post(caller, data)


@router.delete(
    "/comments/{comment_id}",
    status_code=204,
    summary="Delete a post comment",
    responses={
        **AUTH_REQUIRED,
        403: {"description": "Only the author or staff can delete"},
        404: {"description": "Comment not found"},
    },
)
async def delete_comment(
    comment_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> None:
    CommunityService(db).delete_comment(caller, comment_id)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get a community post",
    responses={404: {"description": "Post not found"}},
)
async def get_post(post_id: UUID, db: Session = Depends(get_db)) -> PostResponse:
    return CommunityService(db).get_post(post_id)


@router.delete(
    "/{post_id}",
    status_code=204,
    summary="Delete a community post",
    responses={
        **AUTH_REQUIRED,
        403: {"description": "Only the author or staff can delete"},
        404: {"description": "Post not found"},
    },
)
async def delete_post(
    post_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> None:
    CommunityService(db).delete_post(caller, post_id)


@router.post(
    "/{post_id}/vote",
    response_model=VoteStatusResponse,
    summary="Vote on a poll",
    responses={
        **AUTH_REQUIRED,
        404: {"description": "Post or option not found"},
        409: {"description": "Already voted"},
    },
)
async def vote(
    post_id: UUID,
    data: VoteRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> VoteStatusResponse:
    return CommunityService(db).vote(caller, post_id, data.option_id)


@router.get(
    "/{post_id}/vote",
    response_model=VoteStatusResponse,
    summary="Check whether the caller voted",
    responses=AUTH_REQUIRED,
)
async def has_voted(
    post_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> VoteStatusResponse:
    return CommunityService(db).has_voted(caller, post_id)


@router.post(
    "/{post_id}/like",
    response_model=LikeStatusResponse,
    summary="Like or unlike a post",
    responses={**AUTH_REQUIRED, 404: {"description": "Post not found"}},
)
async def toggle_like(
    post_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> LikeStatusResponse:
    return CommunityService(db).toggle_like(caller, post_id)


@router.get(
    "/{post_id}/like",
    response_model=LikeStatusResponse,
    summary="Check whether the caller liked a post",
    responses={**AUTH_REQUIRED, 404: {"description": "Post not found"}},
)
async def has_liked(
    post_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> LikeStatusResponse:
    return CommunityService(db).has_liked(caller, post_id)


@router.get(
    "/{post_id}/comments",
    response_model=list[PostCommentResponse],
    summary="List comments on a post",
    responses={404: {"description": "Post not found"}},
)
async def get_comments(
    post_id: UUID,
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> list[PostCommentResponse]:
    return CommunityService(db).get_comments(post_id, {"limit": limit, "offset": offset})


@router.post(
    "/{post_id}/comments",
    response_model=PostCommentResponse,
    status_code=201,
    summary="Comment on a post",
    responses={
        **AUTH_REQUIRED,
        403: {"description": "Banned users cannot comment"},
        404: {"description": "Post not found"},
    },
)
async def add_comment(
    post_id: UUID,
    data: PostCommentCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> PostCommentResponse:
    comment = CommunityService(db).add_comment(caller, post_id, data)
    return PostCommentResponse.model_validate(comment)
