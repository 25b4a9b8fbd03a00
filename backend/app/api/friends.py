"""Friend request and friend list endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.api.serializers import serialize_friend_request, serialize_user
from app.database import get_db
from app.models import FriendRequestStatus, User
from app.schemas import FriendRequestRead, FriendTarget, SuccessResponse, UserRead
from app.services import friends as friend_service

router = APIRouter(prefix="/friends", tags=["friends"])


@router.post("/request", response_model=SuccessResponse)
def send_request(
    payload: FriendTarget,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    """Send a new friend request."""

    target = db.get(User, payload.friend_id)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if target.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot send a friend request to yourself",
        )

    outgoing = friend_service.get_friend_edge(current_user.id, target.id, db)
    incoming = friend_service.get_friend_edge(target.id, current_user.id, db)
    if outgoing is not None and outgoing.status == FriendRequestStatus.ACCEPTED:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Already friends")
    if outgoing is not None and outgoing.status == FriendRequestStatus.PENDING:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request already sent")
    if incoming is not None and incoming.status == FriendRequestStatus.PENDING:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This user has already sent you a request",
        )

    friend_service.send_friend_request(current_user.id, target.id, db)
    return SuccessResponse()


@router.get("/requests", response_model=list[FriendRequestRead])
def list_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[FriendRequestRead]:
    """Return pending requests addressed to the current user."""

    return [
        serialize_friend_request(edge)
        for edge in friend_service.get_friend_requests(current_user.id, db)
    ]


@router.post("/accept", response_model=SuccessResponse)
def accept_request(
    payload: FriendTarget,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    if not friend_service.accept_friend_request(current_user.id, payload.friend_id, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Friend request not found")
    return SuccessResponse()


@router.post("/decline", response_model=SuccessResponse)
def decline_request(
    payload: FriendTarget,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    if not friend_service.decline_friend_request(current_user.id, payload.friend_id, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Friend request not found")
    return SuccessResponse()


@router.get("", response_model=list[UserRead])
def list_friends(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[UserRead]:
    """Return accepted friends for the current user."""

    return [serialize_user(user) for user in friend_service.get_friends(current_user.id, db)]
