"""Admin notification inbox endpoints."""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth import Caller, get_staff_caller
from app.core.database import get_db
from app.models.notification import AdminNotificationType
from app.schemas.notification import (
    AdminNotificationResponse,
    NotificationBulkResponse,
    NotificationCountResponse,
)
from app.services.notification_service import AdminNotificationService

router = APIRouter()

STAFF_ONLY = {
    401: {"description": "Unauthorized – invalid or missing token"},
    403: {"description": "Admin or moderator role required"},
}


@router.get(
    "/",
    response_model=list[AdminNotificationResponse],
    summary="List admin notifications",
    responses=STAFF_ONLY,
)
async def list_notifications(
    limit: int = Query(default=30, ge=1, le=100),
    unread_only: bool = False,
    priority: Literal["all", "low", "medium", "high", "critical"] = Query(default="all"),
    type: AdminNotificationType | None = None,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> list[AdminNotificationResponse]:
    """List active (non-dismissed) notifications, newest first."""
    notifications = AdminNotificationService(db).list_notifications(
        caller,
        {"limit": limit, "unread_only": unread_only, "priority": priority, "type": type},
    )
    return [AdminNotificationResponse.model_validate(n) for n in notifications]


@router.get(
    "/unread_count",
    response_model=NotificationCountResponse,
    summary="Get unread notification count",
    responses=STAFF_ONLY,
)
async def get_unread_count(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> NotificationCountResponse:
    """Unread, non-dismissed count plus the interval clients should poll at."""
    return AdminNotificationService(db).count_unread(caller)


@router.post(
    "/{notification_id}/read",
    response_model=AdminNotificationResponse,
    summary="Mark a notification as read",
    responses={**STAFF_ONLY, 404: {"description": "Notification not found"}},
)
async def mark_as_read(
    notification_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> AdminNotificationResponse:
    notification = AdminNotificationService(db).mark_read(caller, notification_id)
    return AdminNotificationResponse.model_validate(notification)


@router.post(
    "/read_all",
    response_model=NotificationBulkResponse,
    summary="Mark all notifications as read",
    responses=STAFF_ONLY,
)
async def mark_all_as_read(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> NotificationBulkResponse:
    count = AdminNotificationService(db).mark_all_read(caller)
    return NotificationBulkResponse(count=count)


@router.post(
    "/{notification_id}/dismiss",
    response_model=AdminNotificationResponse,
    summary="Dismiss a notification",
    responses={**STAFF_ONLY, 404: {"description": "Notification not found"}},
)
async def dismiss(
    notification_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> AdminNotificationResponse:
    notification = AdminNotificationService(db).dismiss(caller, notification_id)
    return AdminNotificationResponse.model_validate(notification)


@router.post(
    "/dismiss_read",
    response_model=NotificationBulkResponse,
    summary="Dismiss every read notification",
    responses=STAFF_ONLY,
)
async def dismiss_all_read(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_staff_caller),
) -> NotificationBulkResponse:
    """Unread notifications are kept."""
    count = AdminNotificationService(db).dismiss_all_read(caller)
    return NotificationBulkResponse(count=count)
