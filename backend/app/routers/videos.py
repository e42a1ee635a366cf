from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import Caller, get_current_caller, get_staff_caller
from app.core.database import get_db
from app.schemas.video import ClassifierScore, VideoCreate, VideoResponse, VideoUpdate
from app.services.video_service import VideoService

router = APIRouter()


@router.post(
    "/",
    response_model=VideoResponse,
    status_code=201,
    summary="Register an uploaded video",
    responses={
        401: {"description": "Unauthorized – invalid or missing token"},
        403: {"description": "Banned users cannot upload"},
        409: {"description": "Upload already registered"},
        422: {"description": "Validation error"},
    },
)
async def upload_video(
    data: VideoCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> VideoResponse:
    """Create a video in the review queue."""
    video = VideoService(db).upload(caller, data)
    return VideoResponse.model_validate(video)


@router.patch(
    "/{video_id}",
    response_model=VideoResponse,
    summary="Edit a video",
    responses={
        401: {"description": "Unauthorized – invalid or missing token"},
        403: {"description": "Not the owner"},
        404: {"description": "Video not found"},
    },
)
async def update_video(
    video_id: UUID,
    data: VideoUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> VideoResponse:
    video = VideoService(db).update(caller, video_id, data)
    return VideoResponse.model_validate(video)


@router.post(
    "/{video_id}/nsfw_score",
    response_model=VideoResponse,
    summary="Record an NSFW classifier score",
    responses={
        401: {"description": "Unauthorized – invalid or missing token"},
        403: {"description": "Admin or moderator role required"},
        404: {"description": "Video not found"},
    },
)
async def record_nsfw_score(
    video_id: UUID,
    data: ClassifierScore,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> VideoResponse:
    """Callback for the classifier worker, which runs with a staff identity."""
    video = VideoService(db).record_nsfw_score(video_id, data.score)
    return VideoResponse.model_validate(video)
