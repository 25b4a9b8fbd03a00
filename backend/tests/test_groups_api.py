"""Interest group membership and group post tests."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.models import Group, GroupRole
from app.services.groups import join_group, leave_group


@pytest.fixture()
def alice(make_user):
    return make_user("u-alice", username="alice")


@pytest.fixture()
def bob(make_user):
    return make_user("u-bob", username="bob")


def create_group(client: TestClient, name: str = "Hikers", **extra: Any) -> dict[str, Any]:
    response = client.post("/api/groups", json={"name": name, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def test_creator_is_admin_member(client: TestClient, alice, login_as):
    login_as(alice.id)
    group = create_group(client, "Hikers", description="Trails and peaks")

    assert group["memberCount"] == 1
    assert group["createdBy"] == alice.id
    assert group["creator"]["username"] == "alice"
    assert [(m["userId"], m["role"]) for m in group["members"]] == [(alice.id, GroupRole.ADMIN.value)]

    mine = client.get("/api/groups/user").json()
    assert [item["id"] for item in mine] == [group["id"]]


def test_join_and_leave_adjust_member_count(client: TestClient, alice, bob, login_as):
    login_as(alice.id)
    group = create_group(client)

    login_as(bob.id)
    assert client.post(f"/api/groups/{group['id']}/join").json() == {"success": True}
    client.post(f"/api/groups/{group['id']}/join")

    details = client.get(f"/api/groups/{group['id']}").json()
    assert details["memberCount"] == 2
    assert {m["userId"]: m["role"] for m in details["members"]} == {
        alice.id: "admin",
        bob.id: "member",
    }

    assert client.post(f"/api/groups/{group['id']}/leave").status_code == 200
    client.post(f"/api/groups/{group['id']}/leave")
    details = client.get(f"/api/groups/{group['id']}").json()
    assert details["memberCount"] == 1
    assert client.get("/api/groups/user").json() == []


def test_missing_group_is_404(client: TestClient, alice, login_as):
    login_as(alice.id)
    assert client.get("/api/groups/404").status_code == 404
    assert client.post("/api/groups/404/join").status_code == 404
    assert client.post("/api/groups/404/leave").status_code == 404
    assert client.get("/api/groups/404/posts").status_code == 404


def test_search_groups(client: TestClient, alice, login_as):
    login_as(alice.id)
    hikers = create_group(client, "Weekend Hikers")
    create_group(client, "Chess Club")

    results = client.get("/api/groups/search", params={"q": "hik"}).json()
    assert [item["id"] for item in results] == [hikers["id"]]
    assert client.get("/api/groups/search").status_code == 400


def test_only_members_can_post(client: TestClient, alice, bob, login_as):
    login_as(alice.id)
    group = create_group(client)

    login_as(bob.id)
    response = client.post(f"/api/groups/{group['id']}/posts", json={"content": "hello"})
    assert response.status_code == 403
    assert response.json() == {"detail": "Not a group member"}

    client.post(f"/api/groups/{group['id']}/join")
    response = client.post(f"/api/groups/{group['id']}/posts", json={"content": "hello"})
    assert response.status_code == 201
    post = response.json()
    assert post["groupId"] == group["id"]
    assert post["user"]["id"] == bob.id

    posts = client.get(f"/api/groups/{group['id']}/posts").json()
    assert [item["id"] for item in posts] == [post["id"]]


def test_membership_service_is_idempotent(db_session, alice, bob):
    group = Group(name="Readers", created_by=alice.id, member_count=1)
    db_session.add(group)
    db_session.commit()

    assert join_group(bob.id, group.id, db_session) is True
    assert join_group(bob.id, group.id, db_session) is False
    assert leave_group(bob.id, group.id, db_session) is True
    assert leave_group(bob.id, group.id, db_session) is False

    db_session.refresh(group)
    assert group.member_count == 1


def test_group_search_treats_wildcards_literally(client: TestClient, alice, login_as):
    login_as(alice.id)
    create_group(client, "Board Games")
    literal = create_group(client, "50% Off Club")

    results = client.get("/api/groups/search", params={"q": "%"}).json()
    assert [item["id"] for item in results] == [literal["id"]]
    assert client.get("/api/groups/search", params={"q": "_"}).json() == []
