"""Conversions from ORM rows to response schemas."""

from __future__ import annotations

from app.models import Friend, Group, GroupPost, Notification, Post, PostComment, User
from app.schemas import (
    CommentRead,
    FriendRequestRead,
    GroupMemberRead,
    GroupPostRead,
    GroupRead,
    GroupWithMembersRead,
    LikeRead,
    NotificationRead,
    PostRead,
    PostWithDetailsRead,
    UserRead,
)
from app.services.posts import PostDetails


def serialize_user(user: User) -> UserRead:
    return UserRead.model_validate(user)


def serialize_comment(comment: PostComment) -> CommentRead:
    return CommentRead(
        id=comment.id,
        user_id=comment.user_id,
        post_id=comment.post_id,
        content=comment.content,
        created_at=comment.created_at,
        user=serialize_user(comment.user),
    )


def _post_fields(post: Post | GroupPost) -> dict:
    return {
        "id": post.id,
        "user_id": post.user_id,
        "content": post.content,
        "image_url": post.image_url,
        "likes_count": post.likes_count,
        "comments_count": post.comments_count,
        "created_at": post.created_at,
        "user": serialize_user(post.author),
    }


def serialize_post(post: Post) -> PostRead:
    return PostRead(**_post_fields(post))


def serialize_post_details(details: PostDetails) -> PostWithDetailsRead:
    return PostWithDetailsRead(
        **_post_fields(details.post),
        likes=[LikeRead(user=serialize_user(user)) for user in details.likes],
        comments=[serialize_comment(comment) for comment in details.comments],
        is_liked=details.is_liked,
    )


def serialize_group_post(post: GroupPost) -> GroupPostRead:
    return GroupPostRead(group_id=post.group_id, **_post_fields(post))


def serialize_friend_request(edge: Friend) -> FriendRequestRead:
    return FriendRequestRead(
        id=edge.id,
        user_id=edge.user_id,
        friend_id=edge.friend_id,
        status=edge.status,
        created_at=edge.created_at,
        friend=serialize_user(edge.user),
    )


def _group_fields(group: Group) -> dict:
    return {
        "id": group.id,
        "name": group.name,
        "description": group.description,
        "created_by": group.created_by,
        "member_count": group.member_count,
        "image_url": group.image_url,
        "created_at": group.created_at,
        "creator": serialize_user(group.creator),
    }


def serialize_group(group: Group) -> GroupRead:
    return GroupRead(**_group_fields(group))


def serialize_group_with_members(group: Group) -> GroupWithMembersRead:
    members = [
        GroupMemberRead(
            id=member.id,
            group_id=member.group_id,
            user_id=member.user_id,
            role=member.role,
            created_at=member.created_at,
            user=serialize_user(member.user),
        )
        for member in group.members
    ]
    return GroupWithMembersRead(**_group_fields(group), members=members)


def serialize_notification(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id,
        user_id=notification.user_id,
        type=notification.type,
        sender_id=notification.sender_id,
        post_id=notification.post_id,
        group_id=notification.group_id,
        message=notification.message,
        read=notification.read,
        created_at=notification.created_at,
        sender=serialize_user(notification.sender) if notification.sender is not None else None,
    )
