from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import Caller, get_current_caller
from app.core.database import get_db
from app.schemas.comment import CommentCreate, CommentResponse
from app.services.comment_service import CommentService

router = APIRouter()


@router.post(
    "/",
    response_model=CommentResponse,
    status_code=201,
    summary="Comment on a video",
    responses={
        401: {"description": "Unauthorized – invalid or missing token"},
        403: {"description": "Banned users cannot comment"},
        404: {"description": "Video not found"},
    },
)
async def create_comment(
    data: CommentCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> CommentResponse:
    """Post a comment. High toxicity scores flag or hide it for moderators."""
    comment = CommentService(db).create(caller, data)
    return CommentResponse.model_validate(comment)
