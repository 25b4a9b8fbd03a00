"""Unit tests validating Pydantic schema constraints."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.schemas import CommentCreate, FriendTarget, GroupCreate, PostCreate, UserProfileUpdate, UserRead


def test_post_create_strips_whitespace():
    post = PostCreate(content="  Planning a trip  ")
    assert post.content == "Planning a trip"


def test_post_create_requires_text_or_image():
    with pytest.raises(ValidationError):
        PostCreate(content="   ")
    assert PostCreate(imageUrl="https://img.example.com/a.png").content == ""


def test_comment_create_requires_non_empty_content():
    with pytest.raises(ValidationError):
        CommentCreate(content="   ")


def test_group_create_requires_name():
    with pytest.raises(ValidationError):
        GroupCreate(name=" ")


def test_friend_target_accepts_camel_case():
    assert FriendTarget.model_validate({"friendId": "u-1"}).friend_id == "u-1"


def test_profile_update_limits_interests():
    with pytest.raises(ValidationError):
        UserProfileUpdate(interests=[f"tag{i}" for i in range(21)])


def test_user_read_serializes_camel_case():
    user = UserRead(
        id="u-1",
        first_name="Ada",
        profile_image_url=None,
        interests=None,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    dumped = user.model_dump(by_alias=True)
    assert dumped["firstName"] == "Ada"
    assert dumped["interests"] == []
    assert "profileImageUrl" in dumped
