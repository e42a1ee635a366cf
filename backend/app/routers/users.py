from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import Caller, get_current_caller, get_token_subject
from app.core.database import get_db
from app.repositories.user_repository import UserRepository
from app.schemas.user import SignUpRequest, UserResponse
from app.services.user_service import UserService

router = APIRouter()


@router.post(
    "/signup",
    response_model=UserResponse,
    summary="Create or refresh the signed-in user",
    responses={401: {"description": "Unauthorized – invalid or missing token"}},
)
async def sign_up(
    data: SignUpRequest,
    db: Session = Depends(get_db),
    external_id: str = Depends(get_token_subject),
) -> UserResponse:
    """Called after the identity provider signs a user in. Safe to repeat."""
    user = UserService(db).sign_up({"external_id": external_id, **data.model_dump()})
    return UserResponse.model_validate(user)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the signed-in user",
    responses={401: {"description": "Unauthorized – invalid or missing token"}},
)
async def get_me(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> UserResponse:
    return UserResponse.model_validate(UserRepository(db).get_by_id(caller.user_id))
