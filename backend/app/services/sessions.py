"""Server-side session storage keyed by an opaque cookie value."""

from __future__ import annotations

import json
import logging
import secrets
from typing import Any

from app.config import get_settings
from app.services.cache import get_cache

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "session:"


def _session_key(session_id: str) -> str:
    return f"{SESSION_KEY_PREFIX}{session_id}"


def create_session(claims: dict[str, Any]) -> str:
    """Persist identity claims and return the new session identifier."""

    settings = get_settings()
    session_id = secrets.token_urlsafe(32)
    payload = {"claims": claims}
    get_cache().set(_session_key(session_id), json.dumps(payload), settings.session_ttl_seconds)
    logger.debug("Created session for subject %s", claims.get("sub"))
    return session_id


def load_session(session_id: str) -> dict[str, Any] | None:
    """Return the claims stored for a session and renew its lifetime.

    ``None`` is returned for unknown, expired or corrupted sessions.
    """

    if not session_id:
        return None
    cache = get_cache()
    key = _session_key(session_id)
    cached = cache.get(key)
    if cached is None:
        return None
    try:
        payload = json.loads(cached)
    except json.JSONDecodeError:
        logger.warning("Discarding corrupted session payload")
        cache.delete(key)
        return None
    claims = payload.get("claims")
    if not isinstance(claims, dict):
        cache.delete(key)
        return None
    # Sliding expiry: every authenticated request renews the session.
    cache.touch(key, get_settings().session_ttl_seconds)
    return claims


def destroy_session(session_id: str) -> None:
    """Forget a session; unknown identifiers are ignored."""

    if session_id:
        get_cache().delete(_session_key(session_id))
