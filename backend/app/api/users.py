"""User search, suggestions and profile endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.api.serializers import serialize_user
from app.database import get_db
from app.models import User
from app.schemas import UserProfileUpdate, UserRead
from app.services.users import (
    UsernameTakenError,
    get_suggested_friends,
    search_users,
    update_user_profile,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/search", response_model=list[UserRead])
def search(
    q: str | None = Query(default=None, max_length=128),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[UserRead]:
    if not q or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query parameter 'q' is required",
        )
    return [serialize_user(user) for user in search_users(q.strip(), current_user.id, db)]


@router.get("/suggested", response_model=list[UserRead])
def suggested(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[UserRead]:
    return [serialize_user(user) for user in get_suggested_friends(current_user.id, db, limit=5)]


@router.put("/profile", response_model=UserRead)
def update_profile(
    payload: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    """Update mutable profile fields for the current user."""

    changes = payload.model_dump(exclude_unset=True)
    try:
        user = update_user_profile(current_user, changes, db)
    except UsernameTakenError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username is already taken",
        ) from None
    return serialize_user(user)
