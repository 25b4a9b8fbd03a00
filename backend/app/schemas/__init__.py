"""Pydantic schemas for API payloads."""

from .base import APIModel, SuccessResponse
from .friends import FriendRequestRead, FriendTarget
from .groups import (
    GroupCreate,
    GroupMemberRead,
    GroupPostRead,
    GroupRead,
    GroupWithMembersRead,
)
from .notifications import NotificationRead, UnreadCount
from .posts import (
    CommentCreate,
    CommentRead,
    LikeRead,
    PostCreate,
    PostRead,
    PostWithDetailsRead,
)
from .users import UserProfileUpdate, UserRead

__all__ = [
    "APIModel",
    "SuccessResponse",
    "UserRead",
    "UserProfileUpdate",
    "PostCreate",
    "PostRead",
    "PostWithDetailsRead",
    "CommentCreate",
    "CommentRead",
    "LikeRead",
    "FriendTarget",
    "FriendRequestRead",
    "GroupCreate",
    "GroupRead",
    "GroupMemberRead",
    "GroupWithMembersRead",
    "GroupPostRead",
    "NotificationRead",
    "UnreadCount",
]
