"""Login, logout and session endpoints backed by the identity provider."""

import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.api.serializers import serialize_user
from app.config import get_settings
from app.core.security import (
    build_login_url,
    clear_session_cookie,
    decode_identity_token,
    set_session_cookie,
)
from app.database import get_db
from app.models import User
from app.schemas import UserRead
from app.services.sessions import create_session, destroy_session
from app.services.users import upsert_user

router = APIRouter(tags=["auth"])
settings = get_settings()
logger = logging.getLogger(__name__)


@router.get("/login")
def login() -> RedirectResponse:
    """Send the browser to the identity provider."""

    return RedirectResponse(build_login_url(), status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/callback")
def login_callback(
    token: str = Query(..., min_length=1, description="Identity token issued by the provider"),
    db: Session = Depends(get_db),
) -> RedirectResponse:
    """Complete a login: validate the token, mirror the user and open a session."""

    claims = decode_identity_token(token)
    user = upsert_user(claims, db)
    session_id = create_session(claims.as_dict())
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    set_session_cookie(response, session_id)
    logger.info("User %s signed in", user.id)
    return response


@router.get("/logout")
def logout(request: Request) -> RedirectResponse:
    """Drop the server-side session and hand off to the provider's logout page."""

    session_id = request.cookies.get(settings.session_cookie_name)
    if session_id:
        destroy_session(session_id)
    params = urlencode({"client_id": settings.identity_provider_client_id})
    response = RedirectResponse(
        f"{settings.identity_provider_logout_url}?{params}",
        status_code=status.HTTP_303_SEE_OTHER,
    )
    clear_session_cookie(response)
    return response


@router.get("/auth/user", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return serialize_user(current_user)
