"""Synchronous client for the Hearth HTTP API.

Reads are cached by query key (path plus sorted query string). Every mutation
invalidates the key prefixes whose data it changes, so the next read goes back
to the server; nothing is updated optimistically. A 401 response is reported
through the ``on_unauthorized`` callback, which receives the login URL.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping
from urllib.parse import urlencode

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_SESSION_COOKIE = "hearth_session"
LOGIN_PATH = "/api/login"

POSTS_KEYS = ("/api/posts/feed", "/api/posts/user")

# Query-key prefixes refreshed after each mutation.
INVALIDATIONS: dict[str, tuple[str, ...]] = {
    "create_post": POSTS_KEYS,
    "like": ("/api/posts/",),
    "unlike": ("/api/posts/",),
    "comment": ("/api/posts/",),
    "update_profile": ("/api/auth/user", *POSTS_KEYS),
    "send_friend_request": ("/api/users/suggested", "/api/friends/requests"),
    "accept_friend": ("/api/friends", "/api/notifications", "/api/posts/feed"),
    "decline_friend": ("/api/friends/requests", "/api/notifications"),
    "create_group": ("/api/groups/user",),
    "join_group": ("/api/groups",),
    "leave_group": ("/api/groups",),
    "create_group_post": ("/api/groups",),
    "mark_notification_read": ("/api/notifications",),
}

UnauthorizedCallback = Callable[[str], None]


class ApiError(Exception):
    """Non-successful API response."""

    def __init__(self, status_code: int, detail: Any) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class UnauthorizedError(ApiError):
    """The session is missing or expired."""


def _query_key(path: str, params: Mapping[str, Any] | None = None) -> str:
    if not params:
        return path
    filtered = sorted((key, value) for key, value in params.items() if value is not None)
    return f"{path}?{urlencode(filtered)}" if filtered else path


class HearthClient:
    """Thin wrapper over :class:`httpx.Client` with a per-query result cache."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session_id: str | None = None,
        on_unauthorized: UnauthorizedCallback | None = None,
        cookie_name: str = DEFAULT_SESSION_COOKIE,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        cookies = {cookie_name: session_id} if session_id else None
        self._http = httpx.Client(
            base_url=base_url,
            cookies=cookies,
            transport=transport,
            timeout=timeout,
        )
        self._on_unauthorized = on_unauthorized
        self._cache: dict[str, Any] = {}
        self.login_url = f"{base_url.rstrip('/')}{LOGIN_PATH}"

    def __enter__(self) -> "HearthClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------
    # Transport and cache plumbing
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        response = self._http.request(method, path, params=params, json=json)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            detail = self._detail(response)
            if self._on_unauthorized is not None:
                self._on_unauthorized(self.login_url)
            raise UnauthorizedError(response.status_code, detail)
        if response.is_error:
            raise ApiError(response.status_code, self._detail(response))
        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _detail(response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict) and "detail" in body:
            return body["detail"]
        return body

    def _query(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        key = _query_key(path, params)
        if key in self._cache:
            return self._cache[key]
        data = self._request("GET", path, params={k: v for k, v in (params or {}).items() if v is not None})
        self._cache[key] = data
        return data

    def _mutate(self, action: str, method: str, path: str, json: Any = None) -> Any:
        data = self._request(method, path, json=json)
        self.invalidate(*INVALIDATIONS[action])
        return data

    def invalidate(self, *prefixes: str) -> None:
        """Drop cached results whose key starts with any of ``prefixes``."""

        stale = [key for key in self._cache if key.startswith(prefixes)]
        for key in stale:
            del self._cache[key]
        if stale:
            logger.debug("Invalidated %d cached queries", len(stale))

    def cached_keys(self) -> Iterable[str]:
        return tuple(self._cache)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def current_user(self) -> dict[str, Any]:
        return self._query("/api/auth/user")

    def search_users(self, query: str) -> list[dict[str, Any]]:
        return self._query("/api/users/search", {"q": query})

    def suggested_users(self) -> list[dict[str, Any]]:
        return self._query("/api/users/suggested")

    def update_profile(self, **fields: Any) -> dict[str, Any]:
        return self._mutate("update_profile", "PUT", "/api/users/profile", json=fields)

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    def create_post(self, content: str = "", image_url: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": content}
        if image_url is not None:
            payload["imageUrl"] = image_url
        return self._mutate("create_post", "POST", "/api/posts", json=payload)

    def feed(self, limit: int = 20, offset: int = 0) -> list[dict[str, Any]]:
        return self._query("/api/posts/feed", {"limit": limit, "offset": offset})

    def user_posts(self, user_id: str, limit: int = 20, offset: int = 0) -> list[dict[str, Any]]:
        return self._query(f"/api/posts/user/{user_id}", {"limit": limit, "offset": offset})

    def post(self, post_id: int) -> dict[str, Any]:
        return self._query(f"/api/posts/{post_id}")

    def like(self, post_id: int) -> None:
        self._mutate("like", "POST", f"/api/posts/{post_id}/like")

    def unlike(self, post_id: int) -> None:
        self._mutate("unlike", "DELETE", f"/api/posts/{post_id}/like")

    def toggle_like(self, post: Mapping[str, Any]) -> None:
        """Like or unlike a post as rendered in a feed payload."""

        if post.get("isLiked"):
            self.unlike(post["id"])
        else:
            self.like(post["id"])

    def comment(self, post_id: int, content: str) -> dict[str, Any]:
        return self._mutate("comment", "POST", f"/api/posts/{post_id}/comments", json={"content": content})

    def comments(self, post_id: int) -> list[dict[str, Any]]:
        return self._query(f"/api/posts/{post_id}/comments")

    # ------------------------------------------------------------------
    # Friends
    # ------------------------------------------------------------------

    def send_friend_request(self, friend_id: str) -> None:
        self._mutate("send_friend_request", "POST", "/api/friends/request", json={"friendId": friend_id})

    def friend_requests(self) -> list[dict[str, Any]]:
        return self._query("/api/friends/requests")

    def accept_friend(self, friend_id: str) -> None:
        self._mutate("accept_friend", "POST", "/api/friends/accept", json={"friendId": friend_id})

    def decline_friend(self, friend_id: str) -> None:
        self._mutate("decline_friend", "POST", "/api/friends/decline", json={"friendId": friend_id})

    def friends(self) -> list[dict[str, Any]]:
        return self._query("/api/friends")

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def create_group(
        self,
        name: str,
        description: str | None = None,
        image_url: str | None = None,
    ) -> dict[str, Any]:
        payload = {"name": name, "description": description, "imageUrl": image_url}
        return self._mutate(
            "create_group",
            "POST",
            "/api/groups",
            json={key: value for key, value in payload.items() if value is not None},
        )

    def my_groups(self) -> list[dict[str, Any]]:
        return self._query("/api/groups/user")

    def search_groups(self, query: str) -> list[dict[str, Any]]:
        return self._query("/api/groups/search", {"q": query})

    def group(self, group_id: int) -> dict[str, Any]:
        return self._query(f"/api/groups/{group_id}")

    def join_group(self, group_id: int) -> None:
        self._mutate("join_group", "POST", f"/api/groups/{group_id}/join")

    def leave_group(self, group_id: int) -> None:
        self._mutate("leave_group", "POST", f"/api/groups/{group_id}/leave")

    def group_posts(self, group_id: int, limit: int = 20, offset: int = 0) -> list[dict[str, Any]]:
        return self._query(f"/api/groups/{group_id}/posts", {"limit": limit, "offset": offset})

    def create_group_post(
        self, group_id: int, content: str = "", image_url: str | None = None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": content}
        if image_url is not None:
            payload["imageUrl"] = image_url
        return self._mutate("create_group_post", "POST", f"/api/groups/{group_id}/posts", json=payload)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def notifications(self, limit: int = 20) -> list[dict[str, Any]]:
        return self._query("/api/notifications", {"limit": limit})

    def unread_count(self) -> int:
        return self._query("/api/notifications/unread-count")["count"]

    def mark_notification_read(self, notification_id: int) -> None:
        self._mutate("mark_notification_read", "POST", f"/api/notifications/{notification_id}/read")
