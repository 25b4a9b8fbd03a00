"""Friend request lifecycle tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.models import Friend, FriendRequestStatus, Notification, NotificationType
from app.services.friends import are_friends, find_asymmetric_friendships


@pytest.fixture()
def alice(make_user):
    return make_user("u-alice", username="alice")


@pytest.fixture()
def bob(make_user):
    return make_user("u-bob", username="bob")


def send_request(client: TestClient, friend_id: str):
    return client.post("/api/friends/request", json={"friendId": friend_id})


def test_accepting_creates_both_edges(client: TestClient, alice, bob, login_as, db_session):
    login_as(alice.id)
    assert send_request(client, bob.id).json() == {"success": True}

    login_as(bob.id)
    requests = client.get("/api/friends/requests").json()
    assert len(requests) == 1
    assert requests[0]["friend"]["id"] == alice.id
    assert requests[0]["status"] == "pending"

    assert client.post("/api/friends/accept", json={"friendId": alice.id}).status_code == 200
    assert client.get("/api/friends/requests").json() == []
    assert [user["id"] for user in client.get("/api/friends").json()] == [alice.id]

    login_as(alice.id)
    assert [user["id"] for user in client.get("/api/friends").json()] == [bob.id]

    assert are_friends(alice.id, bob.id, db_session)
    assert are_friends(bob.id, alice.id, db_session)
    assert find_asymmetric_friendships(db_session) == []

    types = {
        (row.user_id, row.type)
        for row in db_session.query(Notification).all()
    }
    assert (bob.id, NotificationType.FRIEND_REQUEST) in types
    assert (alice.id, NotificationType.FRIEND_ACCEPTED) in types


def test_request_to_self_is_rejected(client: TestClient, alice, login_as):
    login_as(alice.id)
    response = send_request(client, alice.id)
    assert response.status_code == 400
    assert response.json() == {"detail": "Cannot send a friend request to yourself"}


def test_request_to_unknown_user_is_404(client: TestClient, alice, login_as):
    login_as(alice.id)
    assert send_request(client, "nobody").status_code == 404


def test_duplicate_and_crossed_requests_are_rejected(client: TestClient, alice, bob, login_as):
    login_as(alice.id)
    assert send_request(client, bob.id).status_code == 200
    duplicate = send_request(client, bob.id)
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "Request already sent"

    login_as(bob.id)
    crossed = send_request(client, alice.id)
    assert crossed.status_code == 400
    assert crossed.json()["detail"] == "This user has already sent you a request"


def test_request_to_existing_friend_is_rejected(client: TestClient, alice, bob, login_as):
    login_as(alice.id)
    send_request(client, bob.id)
    login_as(bob.id)
    client.post("/api/friends/accept", json={"friendId": alice.id})

    response = send_request(client, alice.id)
    assert response.status_code == 400
    assert response.json()["detail"] == "Already friends"


def test_decline_then_request_again(client: TestClient, alice, bob, login_as, db_session):
    login_as(alice.id)
    send_request(client, bob.id)

    login_as(bob.id)
    assert client.post("/api/friends/decline", json={"friendId": alice.id}).status_code == 200
    assert client.get("/api/friends/requests").json() == []
    assert client.get("/api/friends").json() == []

    login_as(alice.id)
    assert send_request(client, bob.id).status_code == 200

    edges = db_session.query(Friend).filter_by(user_id=alice.id, friend_id=bob.id).all()
    assert len(edges) == 1
    assert edges[0].status == FriendRequestStatus.PENDING


def test_accept_without_request_is_404(client: TestClient, alice, bob, login_as):
    login_as(bob.id)
    response = client.post("/api/friends/accept", json={"friendId": alice.id})
    assert response.status_code == 404
    assert response.json() == {"detail": "Friend request not found"}
    assert client.post("/api/friends/decline", json={"friendId": alice.id}).status_code == 404


def test_sender_cannot_accept_own_request(client: TestClient, alice, bob, login_as):
    login_as(alice.id)
    send_request(client, bob.id)
    assert client.post("/api/friends/accept", json={"friendId": bob.id}).status_code == 404


def test_asymmetric_edges_are_detected(db_session, alice, bob):
    db_session.add(Friend(user_id=alice.id, friend_id=bob.id, status=FriendRequestStatus.ACCEPTED))
    db_session.commit()

    broken = find_asymmetric_friendships(db_session)
    assert [(edge.user_id, edge.friend_id) for edge in broken] == [(alice.id, bob.id)]
