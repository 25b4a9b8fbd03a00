"""Multi-statement mutations leave no partial writes when a later step fails."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models import (
    FriendRequestStatus,
    Group,
    GroupMember,
    GroupRole,
    Notification,
    Post,
    PostComment,
    PostLike,
)
from app.services import friends as friend_service
from app.services import groups as group_service
from app.services import posts as post_service
from app.services.friends import find_asymmetric_friendships


def fail(*args, **kwargs):
    raise RuntimeError("write failed")


@pytest.fixture()
def alice(make_user):
    return make_user("u-alice", username="alice")


@pytest.fixture()
def bob(make_user):
    return make_user("u-bob", username="bob")


@pytest.fixture()
def post(db_session, alice):
    post = Post(user_id=alice.id, content="hello")
    db_session.add(post)
    db_session.commit()
    return post


def test_like_is_rolled_back_when_notification_fails(db_session, bob, post, monkeypatch):
    monkeypatch.setattr(post_service, "create_notification", fail)

    with pytest.raises(RuntimeError):
        post_service.like_post(bob.id, post.id, db_session)

    db_session.expire_all()
    assert db_session.get(Post, post.id).likes_count == 0
    assert db_session.query(PostLike).count() == 0
    assert db_session.query(Notification).count() == 0


def test_comment_is_rolled_back_when_notification_fails(db_session, bob, post, monkeypatch):
    monkeypatch.setattr(post_service, "create_notification", fail)

    with pytest.raises(RuntimeError):
        post_service.add_comment(bob.id, post.id, "nice", db_session)

    db_session.expire_all()
    assert db_session.get(Post, post.id).comments_count == 0
    assert db_session.query(PostComment).count() == 0


def test_failed_like_over_http_returns_500_without_changes(
    client: TestClient, bob, post, login_as, db_session, monkeypatch
):
    monkeypatch.setattr(post_service, "create_notification", fail)
    session_id = login_as(bob.id)

    with TestClient(app, raise_server_exceptions=False) as raw_client:
        raw_client.cookies.set("hearth_session", session_id)
        response = raw_client.post(f"/api/posts/{post.id}/like")

    assert response.status_code == 500
    db_session.expire_all()
    assert db_session.get(Post, post.id).likes_count == 0
    assert db_session.query(PostLike).count() == 0


def test_accept_keeps_request_pending_when_notification_fails(db_session, alice, bob, monkeypatch):
    friend_service.send_friend_request(alice.id, bob.id, db_session)
    monkeypatch.setattr(friend_service, "create_notification", fail)

    with pytest.raises(RuntimeError):
        friend_service.accept_friend_request(bob.id, alice.id, db_session)

    db_session.expire_all()
    inbound = friend_service.get_friend_edge(alice.id, bob.id, db_session)
    assert inbound.status == FriendRequestStatus.PENDING
    assert inbound.responded_at is None
    assert friend_service.get_friend_edge(bob.id, alice.id, db_session) is None
    assert find_asymmetric_friendships(db_session) == []
    assert [row.type.value for row in db_session.query(Notification).all()] == ["friend_request"]


def test_join_is_rolled_back_when_counter_update_fails(db_session, alice, bob, monkeypatch):
    group = Group(name="Readers", created_by=alice.id, member_count=1)
    db_session.add(group)
    db_session.flush()
    db_session.add(GroupMember(group_id=group.id, user_id=alice.id, role=GroupRole.ADMIN))
    db_session.commit()
    monkeypatch.setattr(group_service, "update", fail)

    with pytest.raises(RuntimeError):
        group_service.join_group(bob.id, group.id, db_session)

    db_session.expire_all()
    assert db_session.get(Group, group.id).member_count == 1
    assert group_service.get_membership(group.id, bob.id, db_session) is None
