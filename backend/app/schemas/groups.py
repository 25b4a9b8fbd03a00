"""Schemas for interest groups."""

from datetime import datetime

from pydantic import Field, constr

from app.models.enums import GroupRole
from app.schemas.base import APIModel
from app.schemas.posts import CommentRead, LikeRead
from app.schemas.users import UserRead


class GroupCreate(APIModel):
    """Payload for creating a new group."""

    name: constr(strip_whitespace=True, min_length=1, max_length=128) = Field(
        ..., description="Human readable group name"
    )
    description: constr(strip_whitespace=True, max_length=2000) | None = None
    image_url: constr(strip_whitespace=True, min_length=1, max_length=512) | None = None


class GroupRead(APIModel):
    id: int
    name: str
    description: str | None = None
    created_by: str
    member_count: int
    image_url: str | None = None
    created_at: datetime
    creator: UserRead


class GroupMemberRead(APIModel):
    id: int
    group_id: int
    user_id: str
    role: GroupRole
    created_at: datetime
    user: UserRead


class GroupWithMembersRead(GroupRead):
    members: list[GroupMemberRead] = Field(default_factory=list)


class GroupPostRead(APIModel):
    """Post inside a group; group posts carry no likes or comments yet."""

    id: int
    group_id: int
    user_id: str
    content: str
    image_url: str | None = None
    likes_count: int = 0
    comments_count: int = 0
    created_at: datetime
    user: UserRead
    likes: list[LikeRead] = Field(default_factory=list)
    comments: list[CommentRead] = Field(default_factory=list)
