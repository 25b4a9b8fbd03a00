"""Notification inbox endpoints; clients poll these."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.api.serializers import serialize_notification
from app.config import get_settings
from app.database import get_db
from app.models import User
from app.schemas import NotificationRead, SuccessResponse, UnreadCount
from app.services import notifications as notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])
settings = get_settings()


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    limit: int = Query(default=settings.notifications_default_limit, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    return [
        serialize_notification(notification)
        for notification in notification_service.get_notifications(current_user.id, db, limit=limit)
    ]


@router.get("/unread-count", response_model=UnreadCount)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCount:
    return UnreadCount(count=notification_service.get_unread_notification_count(current_user.id, db))


@router.post("/{notification_id}/read", response_model=SuccessResponse)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    if not notification_service.mark_notification_read(notification_id, current_user.id, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return SuccessResponse()
