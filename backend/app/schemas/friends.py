"""Schemas for friend requests."""

from datetime import datetime

from pydantic import constr

from app.models.enums import FriendRequestStatus
from app.schemas.base import APIModel
from app.schemas.users import UserRead


class FriendTarget(APIModel):
    """Body of friend request, accept and decline calls."""

    friend_id: constr(strip_whitespace=True, min_length=1, max_length=64)


class FriendRequestRead(APIModel):
    """Pending inbound request; ``friend`` is the requesting user."""

    id: int
    user_id: str
    friend_id: str
    status: FriendRequestStatus
    created_at: datetime
    friend: UserRead
