"""Feed, post, like and comment queries.

Composite post views are assembled with one query for the page of posts and
one batched query each for likes and comments keyed by the page's post ids.
Counter columns are adjusted in the same transaction as the row they cache.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.models import (
    Friend,
    FriendRequestStatus,
    NotificationType,
    Post,
    PostComment,
    PostLike,
    User,
)
from app.services.notifications import create_notification

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PostDetails:
    """A post together with its author, likers and comments."""

    post: Post
    likes: list[User] = field(default_factory=list)
    comments: list[PostComment] = field(default_factory=list)
    is_liked: bool | None = None


def _assemble(posts: Sequence[Post], viewer_id: str | None, db: Session) -> list[PostDetails]:
    if not posts:
        return []
    post_ids = [post.id for post in posts]

    likes_by_post: dict[int, list[PostLike]] = defaultdict(list)
    like_rows = db.execute(
        select(PostLike)
        .where(PostLike.post_id.in_(post_ids))
        .options(selectinload(PostLike.user))
        .order_by(PostLike.id)
    ).scalars()
    for like in like_rows:
        likes_by_post[like.post_id].append(like)

    comments_by_post: dict[int, list[PostComment]] = defaultdict(list)
    comment_rows = db.execute(
        select(PostComment)
        .where(PostComment.post_id.in_(post_ids))
        .options(selectinload(PostComment.user))
        .order_by(PostComment.created_at.desc(), PostComment.id.desc())
    ).scalars()
    for comment in comment_rows:
        comments_by_post[comment.post_id].append(comment)

    details: list[PostDetails] = []
    for post in posts:
        likes = likes_by_post.get(post.id, [])
        is_liked = None
        if viewer_id is not None:
            is_liked = any(like.user_id == viewer_id for like in likes)
        details.append(
            PostDetails(
                post=post,
                likes=[like.user for like in likes],
                comments=comments_by_post.get(post.id, []),
                is_liked=is_liked,
            )
        )
    return details


def _posts_page(stmt, limit: int, offset: int, db: Session) -> list[Post]:
    stmt = (
        stmt.options(selectinload(Post.author))
        .order_by(Post.created_at.desc(), Post.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(db.execute(stmt).scalars().all())


def create_post(author_id: str, content: str, image_url: str | None, db: Session) -> Post:
    post = Post(user_id=author_id, content=content, image_url=image_url)
    db.add(post)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to create post for %s", author_id, exc_info=True)
        raise
    db.refresh(post)
    logger.info("User %s published post %s", author_id, post.id)
    return post


def get_feed_posts(user_id: str, db: Session, limit: int = 20, offset: int = 0) -> list[PostDetails]:
    """Posts by the user and by users on accepted outgoing friend edges, newest first."""

    friend_ids = db.execute(
        select(Friend.friend_id).where(
            Friend.user_id == user_id,
            Friend.status == FriendRequestStatus.ACCEPTED,
        )
    ).scalars().all()
    author_ids = {user_id, *friend_ids}
    posts = _posts_page(select(Post).where(Post.user_id.in_(author_ids)), limit, offset, db)
    return _assemble(posts, user_id, db)


def get_user_posts(
    author_id: str,
    db: Session,
    viewer_id: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> list[PostDetails]:
    posts = _posts_page(select(Post).where(Post.user_id == author_id), limit, offset, db)
    return _assemble(posts, viewer_id, db)


def get_post(post_id: int, db: Session, viewer_id: str | None = None) -> PostDetails | None:
    post = db.execute(
        select(Post).where(Post.id == post_id).options(selectinload(Post.author))
    ).scalar_one_or_none()
    if post is None:
        return None
    return _assemble([post], viewer_id, db)[0]


def like_post(user_id: str, post_id: int, db: Session) -> bool:
    """Record a like and bump the counter atomically.

    Returns ``False`` when the user already likes the post.
    """

    existing = db.execute(
        select(PostLike.id).where(PostLike.user_id == user_id, PostLike.post_id == post_id)
    ).scalar_one_or_none()
    if existing is not None:
        return False

    try:
        db.add(PostLike(user_id=user_id, post_id=post_id))
        db.flush()
        db.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(likes_count=Post.likes_count + 1)
        )
        author_id = db.execute(select(Post.user_id).where(Post.id == post_id)).scalar_one()
        if author_id != user_id:
            create_notification(
                author_id,
                NotificationType.POST_LIKE,
                db,
                sender_id=user_id,
                post_id=post_id,
                commit=False,
            )
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the same like first.
        db.rollback()
        logger.info("Duplicate like by %s on post %s ignored", user_id, post_id)
        return False
    except Exception:
        db.rollback()
        logger.error("Failed to like post %s", post_id, exc_info=True)
        raise
    return True


def unlike_post(user_id: str, post_id: int, db: Session) -> bool:
    """Remove a like and decrement the counter atomically.

    Returns ``False`` when there was nothing to remove; the counter is left
    untouched in that case.
    """

    try:
        result = db.execute(
            delete(PostLike).where(PostLike.user_id == user_id, PostLike.post_id == post_id)
        )
        removed = result.rowcount or 0
        if removed == 0:
            db.rollback()
            return False
        db.execute(
            update(Post)
            .where(Post.id == post_id, Post.likes_count >= removed)
            .values(likes_count=Post.likes_count - removed)
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to unlike post %s", post_id, exc_info=True)
        raise
    return True


def add_comment(user_id: str, post_id: int, content: str, db: Session) -> PostComment:
    comment = PostComment(user_id=user_id, post_id=post_id, content=content)
    try:
        db.add(comment)
        db.flush()
        db.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(comments_count=Post.comments_count + 1)
        )
        author_id = db.execute(select(Post.user_id).where(Post.id == post_id)).scalar_one()
        if author_id != user_id:
            create_notification(
                author_id,
                NotificationType.POST_COMMENT,
                db,
                sender_id=user_id,
                post_id=post_id,
                commit=False,
            )
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to comment on post %s", post_id, exc_info=True)
        raise
    db.refresh(comment)
    return comment


def get_post_comments(post_id: int, db: Session) -> list[PostComment]:
    stmt = (
        select(PostComment)
        .where(PostComment.post_id == post_id)
        .options(selectinload(PostComment.user))
        .order_by(PostComment.created_at.desc(), PostComment.id.desc())
    )
    return list(db.execute(stmt).scalars().all())
