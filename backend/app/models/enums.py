from __future__ import annotations

from enum import Enum


class FriendRequestStatus(str, Enum):
    """Lifecycle states for directional friend edges."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class GroupRole(str, Enum):
    """Roles that a user can have inside an interest group."""

    ADMIN = "admin"
    MEMBER = "member"


class NotificationType(str, Enum):
    """Kinds of notifications emitted by social mutations."""

    FRIEND_REQUEST = "friend_request"
    FRIEND_ACCEPTED = "friend_accepted"
    POST_LIKE = "post_like"
    POST_COMMENT = "post_comment"
    GROUP_INVITE = "group_invite"
