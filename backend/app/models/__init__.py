"""Database models package."""

from .base import Base
from .social import (
    Friend,
    Group,
    GroupMember,
    GroupPost,
    Notification,
    Post,
    PostComment,
    PostLike,
    User,
)
from .enums import FriendRequestStatus, GroupRole, NotificationType

__all__ = [
    "Base",
    "User",
    "Post",
    "PostLike",
    "PostComment",
    "Friend",
    "Group",
    "GroupMember",
    "GroupPost",
    "Notification",
    "FriendRequestStatus",
    "GroupRole",
    "NotificationType",
]
