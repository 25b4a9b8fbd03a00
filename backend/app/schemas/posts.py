"""Schemas for posts, likes and comments."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, constr, model_validator

from app.config import get_settings
from app.schemas.base import APIModel
from app.schemas.users import UserRead

settings = get_settings()


class PostCreate(APIModel):
    """Payload for publishing a post.

    Text may be empty only when an image is attached.
    """

    content: str = Field(default="", max_length=settings.post_max_length)
    image_url: constr(strip_whitespace=True, min_length=1, max_length=512) | None = None

    @model_validator(mode="after")
    def require_text_or_image(self) -> "PostCreate":
        self.content = self.content.strip()
        if not self.content and self.image_url is None:
            raise ValueError("Post must have text or an image")
        return self


class CommentCreate(APIModel):
    """Payload for commenting on a post."""

    content: constr(strip_whitespace=True, min_length=1, max_length=settings.comment_max_length)


class CommentRead(APIModel):
    id: int
    user_id: str
    post_id: int
    content: str
    created_at: datetime
    user: UserRead


class LikeRead(APIModel):
    user: UserRead


class PostRead(APIModel):
    """Post joined with its author."""

    id: int
    user_id: str
    content: str
    image_url: str | None = None
    likes_count: int = 0
    comments_count: int = 0
    created_at: datetime
    user: UserRead


class PostWithDetailsRead(PostRead):
    """Post with likers, comments and whether the caller likes it."""

    likes: list[LikeRead] = Field(default_factory=list)
    comments: list[CommentRead] = Field(default_factory=list)
    is_liked: bool | None = None
