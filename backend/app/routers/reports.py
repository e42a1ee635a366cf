from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import Caller, get_current_caller
from app.core.database import get_db
from app.schemas.report import ReportCreate, ReportResponse
from app.services.report_service import ReportService

router = APIRouter()


@router.post(
    "/",
    response_model=ReportResponse,
    status_code=201,
    summary="Report content or a user",
    responses={
        401: {"description": "Unauthorized – invalid or missing token"},
        403: {"description": "Banned users cannot report"},
        422: {"description": "Validation error"},
    },
)
async def create_report(
    data: ReportCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> ReportResponse:
    report = ReportService(db).create(caller, data)
    return ReportResponse.model_validate(report)
