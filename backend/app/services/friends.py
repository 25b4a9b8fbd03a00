"""Directional friend edges.

A friendship is two accepted edges, ``a -> b`` and ``b -> a``. Both are
written in the same transaction when a request is accepted.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import and_, select
from sqlalchemy.orm import Session, aliased, selectinload

from app.models import Friend, FriendRequestStatus, NotificationType, User
from app.services.notifications import create_notification

logger = logging.getLogger(__name__)


def get_friend_edge(user_id: str, friend_id: str, db: Session) -> Friend | None:
    stmt = select(Friend).where(Friend.user_id == user_id, Friend.friend_id == friend_id)
    return db.execute(stmt).scalar_one_or_none()


def send_friend_request(user_id: str, friend_id: str, db: Session) -> Friend:
    """Open a pending edge ``user_id -> friend_id`` and notify the recipient.

    A previously declined edge is re-opened instead of duplicated.
    """

    edge = get_friend_edge(user_id, friend_id, db)
    if edge is None:
        edge = Friend(user_id=user_id, friend_id=friend_id)
    edge.status = FriendRequestStatus.PENDING
    edge.responded_at = None
    try:
        db.add(edge)
        create_notification(
            friend_id,
            NotificationType.FRIEND_REQUEST,
            db,
            sender_id=user_id,
            commit=False,
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to send friend request %s -> %s", user_id, friend_id, exc_info=True)
        raise
    db.refresh(edge)
    logger.info("Friend request %s -> %s", user_id, friend_id)
    return edge


def _pending_inbound(user_id: str, friend_id: str, db: Session) -> Friend | None:
    edge = get_friend_edge(friend_id, user_id, db)
    if edge is None or edge.status != FriendRequestStatus.PENDING:
        return None
    return edge


def accept_friend_request(user_id: str, friend_id: str, db: Session) -> bool:
    """Accept the pending request ``friend_id -> user_id``.

    Returns ``False`` when there is no pending request to accept.
    """

    inbound = _pending_inbound(user_id, friend_id, db)
    if inbound is None:
        return False

    now = datetime.now(timezone.utc)
    try:
        inbound.status = FriendRequestStatus.ACCEPTED
        inbound.responded_at = now
        reciprocal = get_friend_edge(user_id, friend_id, db)
        if reciprocal is None:
            reciprocal = Friend(user_id=user_id, friend_id=friend_id)
        reciprocal.status = FriendRequestStatus.ACCEPTED
        reciprocal.responded_at = now
        db.add_all([inbound, reciprocal])
        create_notification(
            friend_id,
            NotificationType.FRIEND_ACCEPTED,
            db,
            sender_id=user_id,
            commit=False,
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to accept friend request %s -> %s", friend_id, user_id, exc_info=True)
        raise
    logger.info("Friendship established between %s and %s", user_id, friend_id)
    return True


def decline_friend_request(user_id: str, friend_id: str, db: Session) -> bool:
    inbound = _pending_inbound(user_id, friend_id, db)
    if inbound is None:
        return False
    inbound.status = FriendRequestStatus.DECLINED
    inbound.responded_at = datetime.now(timezone.utc)
    db.add(inbound)
    db.commit()
    return True


def get_friend_requests(user_id: str, db: Session) -> list[Friend]:
    """Pending requests addressed to ``user_id`` with the requester loaded."""

    stmt = (
        select(Friend)
        .where(Friend.friend_id == user_id, Friend.status == FriendRequestStatus.PENDING)
        .options(selectinload(Friend.user))
        .order_by(Friend.created_at.asc(), Friend.id.asc())
    )
    return list(db.execute(stmt).scalars().all())


def get_friends(user_id: str, db: Session) -> list[User]:
    stmt = (
        select(User)
        .join(Friend, Friend.friend_id == User.id)
        .where(Friend.user_id == user_id, Friend.status == FriendRequestStatus.ACCEPTED)
        .order_by(User.username, User.id)
    )
    return list(db.execute(stmt).scalars().all())


def are_friends(user_id: str, friend_id: str, db: Session) -> bool:
    edge = get_friend_edge(user_id, friend_id, db)
    return edge is not None and edge.status == FriendRequestStatus.ACCEPTED


def find_asymmetric_friendships(db: Session) -> list[Friend]:
    """Accepted edges whose reverse edge is missing or not accepted."""

    reverse = aliased(Friend)
    stmt = (
        select(Friend)
        .outerjoin(
            reverse,
            and_(
                reverse.user_id == Friend.friend_id,
                reverse.friend_id == Friend.user_id,
                reverse.status == FriendRequestStatus.ACCEPTED,
            ),
        )
        .where(Friend.status == FriendRequestStatus.ACCEPTED, reverse.id.is_(None))
    )
    return list(db.execute(stmt).scalars().all())
