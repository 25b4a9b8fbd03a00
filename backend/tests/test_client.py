"""Tests for the HTTP client's query cache and error reporting."""

from __future__ import annotations

import json

import httpx
import pytest

from hearth import ApiError, HearthClient, UnauthorizedError


class FakeServer:
    """Records requests and replies from a small route table."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.feed = [{"id": 1, "content": "hi", "isLiked": False, "likesCount": 0}]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.method, request.url.path))
        path = request.url.path
        if path == "/api/auth/user":
            if request.headers.get("cookie") != "hearth_session=sid-1":
                return httpx.Response(401, json={"detail": "Unauthorized"})
            return httpx.Response(200, json={"id": "u-1"})
        if path == "/api/posts/feed":
            return httpx.Response(200, json=self.feed)
        if path == "/api/posts/1/like":
            self.feed[0] = {**self.feed[0], "isLiked": request.method == "POST"}
            return httpx.Response(200, json={"success": True})
        if path == "/api/posts" and request.method == "POST":
            body = json.loads(request.content)
            return httpx.Response(201, json={"id": 2, **body})
        if path == "/api/notifications/unread-count":
            return httpx.Response(200, json={"count": 3})
        return httpx.Response(404, json={"detail": "Post not found"})

    def count(self, method: str, path: str) -> int:
        return self.calls.count((method, path))


@pytest.fixture()
def server() -> FakeServer:
    return FakeServer()


def make_client(server: FakeServer, **kwargs) -> HearthClient:
    return HearthClient(
        "http://hearth.test",
        session_id="sid-1",
        transport=httpx.MockTransport(server),
        **kwargs,
    )


def test_reads_are_cached_per_query_key(server):
    with make_client(server) as api:
        api.feed()
        api.feed()
        assert server.count("GET", "/api/posts/feed") == 1

        api.feed(offset=20)
        assert server.count("GET", "/api/posts/feed") == 2
        assert "/api/posts/feed?limit=20&offset=0" in api.cached_keys()


def test_like_invalidates_feed(server):
    with make_client(server) as api:
        post = api.feed()[0]
        api.toggle_like(post)
        refreshed = api.feed()[0]
        assert refreshed["isLiked"] is True
        assert server.count("GET", "/api/posts/feed") == 2

        api.toggle_like(refreshed)
        assert server.count("DELETE", "/api/posts/1/like") == 1
        assert api.feed()[0]["isLiked"] is False


def test_unrelated_mutation_keeps_cache(server):
    with make_client(server) as api:
        api.unread_count()
        api.create_post("hello", image_url="https://img.example.com/x.png")
        assert api.unread_count() == 3
        assert server.count("GET", "/api/notifications/unread-count") == 1


def test_create_post_sends_camel_case(server):
    with make_client(server) as api:
        post = api.create_post("", image_url="https://img.example.com/x.png")
    assert post == {"id": 2, "content": "", "imageUrl": "https://img.example.com/x.png"}


def test_unauthorized_invokes_callback():
    server = FakeServer()
    redirects: list[str] = []
    api = HearthClient(
        "http://hearth.test",
        transport=httpx.MockTransport(server),
        on_unauthorized=redirects.append,
    )
    with pytest.raises(UnauthorizedError) as excinfo:
        api.current_user()
    api.close()

    assert excinfo.value.status_code == 401
    assert redirects == ["http://hearth.test/api/login"]
    assert api.cached_keys() == ()


def test_error_carries_status_and_detail(server):
    with make_client(server) as api:
        with pytest.raises(ApiError) as excinfo:
            api.post(999)
    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "404: Post not found"
