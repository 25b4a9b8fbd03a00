"""Schemas for notifications."""

from datetime import datetime

from app.models.enums import NotificationType
from app.schemas.base import APIModel
from app.schemas.users import UserRead


class NotificationRead(APIModel):
    id: int
    user_id: str
    type: NotificationType
    sender_id: str | None = None
    post_id: int | None = None
    group_id: int | None = None
    message: str | None = None
    read: bool
    created_at: datetime
    sender: UserRead | None = None


class UnreadCount(APIModel):
    count: int
