"""Interest group endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import Pagination, get_current_user
from app.api.serializers import (
    serialize_group,
    serialize_group_post,
    serialize_group_with_members,
)
from app.database import get_db
from app.models import Group, User
from app.schemas import (
    GroupCreate,
    GroupPostRead,
    GroupRead,
    GroupWithMembersRead,
    PostCreate,
    SuccessResponse,
)
from app.services import groups as group_service

router = APIRouter(prefix="/groups", tags=["groups"])


def _require_group(group_id: int, db: Session) -> Group:
    group = db.get(Group, group_id)
    if group is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return group


@router.post("", response_model=GroupWithMembersRead, status_code=status.HTTP_201_CREATED)
def create_group(
    payload: GroupCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> GroupWithMembersRead:
    group = group_service.create_group(
        current_user.id, payload.name, payload.description, payload.image_url, db
    )
    return serialize_group_with_members(group)


@router.get("/user", response_model=list[GroupWithMembersRead])
def list_user_groups(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[GroupWithMembersRead]:
    """Return groups the current user belongs to."""

    return [
        serialize_group_with_members(group)
        for group in group_service.get_user_groups(current_user.id, db)
    ]


@router.get("/search", response_model=list[GroupRead])
def search(
    q: str | None = Query(default=None, max_length=128),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[GroupRead]:
    if not q or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query parameter 'q' is required",
        )
    return [serialize_group(group) for group in group_service.search_groups(q.strip(), db)]


@router.post("/{group_id}/join", response_model=SuccessResponse)
def join(
    group_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    _require_group(group_id, db)
    group_service.join_group(current_user.id, group_id, db)
    return SuccessResponse()


@router.post("/{group_id}/leave", response_model=SuccessResponse)
def leave(
    group_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    _require_group(group_id, db)
    group_service.leave_group(current_user.id, group_id, db)
    return SuccessResponse()


@router.get("/{group_id}", response_model=GroupWithMembersRead)
def read_group(
    group_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> GroupWithMembersRead:
    group = group_service.get_group(group_id, db)
    if group is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return serialize_group_with_members(group)


@router.get("/{group_id}/posts", response_model=list[GroupPostRead])
def list_group_posts(
    group_id: int,
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[GroupPostRead]:
    _require_group(group_id, db)
    posts = group_service.get_group_posts(
        group_id, db, limit=pagination.limit, offset=pagination.offset
    )
    return [serialize_group_post(post) for post in posts]


@router.post(
    "/{group_id}/posts",
    response_model=GroupPostRead,
    status_code=status.HTTP_201_CREATED,
)
def create_group_post(
    group_id: int,
    payload: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> GroupPostRead:
    _require_group(group_id, db)
    if group_service.get_membership(group_id, current_user.id, db) is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a group member")
    post = group_service.create_group_post(
        group_id, current_user.id, payload.content, payload.image_url, db
    )
    return serialize_group_post(post)
