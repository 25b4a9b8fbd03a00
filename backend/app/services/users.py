"""User profile queries and identity-provider upserts."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import IdentityClaims
from app.models import Friend, FriendRequestStatus, User

logger = logging.getLogger(__name__)

PROFILE_FIELDS: tuple[str, ...] = (
    "username",
    "first_name",
    "last_name",
    "bio",
    "interests",
    "profile_image_url",
)


LIKE_ESCAPE = "\\"


def contains_pattern(query: str) -> str:
    """Lower-cased ``LIKE`` pattern matching ``query`` literally anywhere."""

    escaped = query.lower().replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
    escaped = escaped.replace("%", LIKE_ESCAPE + "%").replace("_", LIKE_ESCAPE + "_")
    return f"%{escaped}%"


class UsernameTakenError(Exception):
    """Raised when a profile update collides with another user's username."""


def get_user(user_id: str, db: Session) -> User | None:
    return db.get(User, user_id)


def upsert_user(claims: IdentityClaims, db: Session) -> User:
    """Create the user for an identity-provider subject or refresh its claims."""

    user = db.get(User, claims.sub)
    if user is None:
        user = User(id=claims.sub, interests=[])
        logger.info("Registering user %s from identity provider", claims.sub)
    user.email = claims.email
    user.first_name = claims.first_name
    user.last_name = claims.last_name
    user.profile_image_url = claims.profile_image_url
    db.add(user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to upsert user %s", claims.sub, exc_info=True)
        raise
    db.refresh(user)
    return user


def update_user_profile(user: User, changes: dict[str, Any], db: Session) -> User:
    """Apply the given profile fields to ``user``; unknown keys are ignored."""

    for field in PROFILE_FIELDS:
        if field in changes:
            setattr(user, field, changes[field])
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise UsernameTakenError(changes.get("username")) from exc
    except Exception:
        db.rollback()
        logger.error("Failed to update profile for %s", user.id, exc_info=True)
        raise
    db.refresh(user)
    return user


def search_users(query: str, current_user_id: str, db: Session, limit: int = 10) -> list[User]:
    """Case-insensitive substring search over usernames and names."""

    pattern = contains_pattern(query)
    stmt = (
        select(User)
        .where(
            User.id != current_user_id,
            or_(
                func.lower(User.username).like(pattern, escape=LIKE_ESCAPE),
                func.lower(User.first_name).like(pattern, escape=LIKE_ESCAPE),
                func.lower(User.last_name).like(pattern, escape=LIKE_ESCAPE),
            ),
        )
        .order_by(User.username, User.id)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def get_suggested_friends(user_id: str, db: Session, limit: int = 5) -> list[User]:
    """Users the caller has no pending or accepted outgoing edge to."""

    connected = select(Friend.friend_id).where(
        Friend.user_id == user_id,
        Friend.status.in_((FriendRequestStatus.PENDING, FriendRequestStatus.ACCEPTED)),
    )
    stmt = (
        select(User)
        .where(User.id != user_id, User.id.not_in(connected))
        .order_by(User.created_at.desc(), User.id)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())
