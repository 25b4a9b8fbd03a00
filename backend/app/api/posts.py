"""HTTP endpoints for posts, likes and comments."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import Pagination, get_current_user
from app.api.serializers import serialize_comment, serialize_post, serialize_post_details
from app.database import get_db
from app.models import Post, User
from app.schemas import (
    CommentCreate,
    CommentRead,
    PostCreate,
    PostRead,
    PostWithDetailsRead,
    SuccessResponse,
)
from app.services import posts as post_service

router = APIRouter(prefix="/posts", tags=["posts"])


def _require_post(post_id: int, db: Session) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PostRead:
    post = post_service.create_post(current_user.id, payload.content, payload.image_url, db)
    return serialize_post(post)


@router.get("/feed", response_model=list[PostWithDetailsRead])
def read_feed(
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[PostWithDetailsRead]:
    """Return the caller's posts and their friends' posts, newest first."""

    feed = post_service.get_feed_posts(
        current_user.id, db, limit=pagination.limit, offset=pagination.offset
    )
    return [serialize_post_details(item) for item in feed]


@router.get("/user/{user_id}", response_model=list[PostWithDetailsRead])
def read_user_posts(
    user_id: str,
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[PostWithDetailsRead]:
    items = post_service.get_user_posts(
        user_id,
        db,
        viewer_id=current_user.id,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return [serialize_post_details(item) for item in items]


@router.get("/{post_id}", response_model=PostWithDetailsRead)
def read_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PostWithDetailsRead:
    details = post_service.get_post(post_id, db, viewer_id=current_user.id)
    if details is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return serialize_post_details(details)


@router.post("/{post_id}/like", response_model=SuccessResponse)
def like(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    _require_post(post_id, db)
    post_service.like_post(current_user.id, post_id, db)
    return SuccessResponse()


@router.delete("/{post_id}/like", response_model=SuccessResponse)
def unlike(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    _require_post(post_id, db)
    post_service.unlike_post(current_user.id, post_id, db)
    return SuccessResponse()


@router.post("/{post_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def add_comment(
    post_id: int,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CommentRead:
    _require_post(post_id, db)
    comment = post_service.add_comment(current_user.id, post_id, payload.content, db)
    return serialize_comment(comment)


@router.get("/{post_id}/comments", response_model=list[CommentRead])
def list_comments(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[CommentRead]:
    _require_post(post_id, db)
    return [serialize_comment(comment) for comment in post_service.get_post_comments(post_id, db)]
