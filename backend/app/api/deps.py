"""FastAPI dependencies for the API layer."""

from fastapi import Depends, HTTPException, Query, Response, status
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.security import set_session_cookie
from app.database import get_db
from app.models import User
from app.services.sessions import load_session

settings = get_settings()

session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def get_current_user(
    response: Response,
    session_id: str | None = Depends(session_cookie),
    db: Session = Depends(get_db),
) -> User:
    """Retrieve the caller from the session cookie.

    The cookie is re-issued with a full ``max_age`` so that it expires
    together with the server-side session, which slides on every request.
    """

    user = get_user_from_session(session_id, db)
    set_session_cookie(response, session_id)
    return user


def get_user_from_session(session_id: str | None, db: Session) -> User:
    """Resolve a user from a session identifier or raise an HTTP 401 error."""

    if not session_id:
        raise _unauthorized()
    claims = load_session(session_id)
    if claims is None or not claims.get("sub"):
        raise _unauthorized()
    user = db.get(User, str(claims["sub"]))
    if user is None:
        raise _unauthorized()
    return user


class Pagination:
    """Offset/limit query parameters shared by list endpoints."""

    def __init__(
        self,
        limit: int = Query(default=settings.feed_default_limit, ge=1, le=settings.feed_max_limit),
        offset: int = Query(default=0, ge=0),
    ) -> None:
        self.limit = limit
        self.offset = offset
