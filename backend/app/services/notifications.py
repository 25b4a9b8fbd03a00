"""Pull-based notification storage."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from app.models import Notification, NotificationType

logger = logging.getLogger(__name__)


def create_notification(
    recipient_id: str,
    notification_type: NotificationType,
    db: Session,
    *,
    sender_id: str | None = None,
    post_id: int | None = None,
    group_id: int | None = None,
    message: str | None = None,
    commit: bool = True,
) -> Notification:
    """Insert a notification for ``recipient_id``.

    With ``commit=False`` the row is only added to the session so that it
    becomes part of the caller's transaction.
    """

    notification = Notification(
        user_id=recipient_id,
        type=notification_type,
        sender_id=sender_id,
        post_id=post_id,
        group_id=group_id,
        message=message,
        read=False,
    )
    db.add(notification)
    if commit:
        try:
            db.commit()
        except Exception:
            db.rollback()
            logger.error("Failed to store %s notification", notification_type.value, exc_info=True)
            raise
        db.refresh(notification)
    logger.debug("Queued %s notification for %s", notification_type.value, recipient_id)
    return notification


def get_notifications(user_id: str, db: Session, limit: int = 20) -> list[Notification]:
    stmt = (
        select(Notification)
        .where(Notification.user_id == user_id)
        .options(selectinload(Notification.sender))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def mark_notification_read(notification_id: int, user_id: str, db: Session) -> bool:
    """Mark one of the user's notifications as read.

    Returns ``False`` when the notification does not exist or belongs to
    another user.
    """

    notification = db.get(Notification, notification_id)
    if notification is None or notification.user_id != user_id:
        return False
    if not notification.read:
        notification.read = True
        db.add(notification)
        db.commit()
    return True


def get_unread_notification_count(user_id: str, db: Session) -> int:
    stmt = select(func.count(Notification.id)).where(
        Notification.user_id == user_id,
        Notification.read.is_(False),
    )
    return int(db.execute(stmt).scalar_one() or 0)
