"""Identity-provider token validation and session cookie helpers."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Any, Dict
from urllib.parse import urlencode

import jwt
from fastapi import HTTPException, Response, status

from app.config import get_settings

settings = get_settings()


@dataclass(slots=True)
class IdentityClaims:
    """Subset of identity-provider claims mirrored into the users table."""

    sub: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "IdentityClaims":
        return cls(
            sub=str(payload["sub"]),
            email=payload.get("email"),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            profile_image_url=payload.get("profile_image_url"),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "sub": self.sub,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "profile_image_url": self.profile_image_url,
        }


def decode_identity_token(token: str) -> IdentityClaims:
    """Decode and validate a token issued by the identity provider."""

    try:
        payload = jwt.decode(
            token,
            settings.identity_token_secret,
            algorithms=[settings.identity_token_algorithm],
            audience=settings.identity_provider_client_id,
            issuer=settings.identity_provider_issuer,
        )
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized") from exc

    if not payload.get("sub"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return IdentityClaims.from_payload(payload)


def build_login_url(state: str | None = None) -> str:
    """Return the identity provider authorize URL for a new login."""

    params = {
        "client_id": settings.identity_provider_client_id,
        "redirect_uri": settings.identity_callback_url,
        "response_type": "id_token",
        "scope": "openid email profile",
        "state": state or secrets.token_urlsafe(16),
    }
    return f"{settings.identity_provider_authorize_url}?{urlencode(params)}"


def set_session_cookie(response: Response, session_id: str) -> None:
    """Attach the session identifier to an HTTP-only cookie."""

    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    """Clear the session cookie from the client."""

    response.delete_cookie(key=settings.session_cookie_name, path="/")
