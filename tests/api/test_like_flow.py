"""End-to-end: a friend added to a group likes a post the group may like.

Tests cover:
    - Full chain: post, group, friendship, membership, permission, like
    - Repeated like -> 409, unlike -> 200, unlike again -> 409
    - View-only grant: post readable, like refused with 403
    - Viewable/likable listings and author-only permission reads
"""

from uuid import uuid4

import pytest


@pytest.fixture
async def circle(client, as_user):
    """An author, a friend who is a member of the author's group, and a post."""
    author, friend = uuid4(), uuid4()
    post = await client.post(
        "/api/v1/posts", json={"content": "summit photos"}, headers=as_user(author),
    )
    group = await client.post(
        "/api/v1/groups", json={"name": "climbers"}, headers=as_user(author),
    )
    await client.post(f"/api/v1/friends/requests/{friend}", headers=as_user(author))
    await client.put(f"/api/v1/friends/accept/{author}", headers=as_user(friend))

    group_id = group.json()["group"]["id"]
    added = await client.put(
        f"/api/v1/groups/{group_id}/members/{friend}", headers=as_user(author),
    )
    assert added.status_code == 200
    return {
        "author": author,
        "friend": friend,
        "post_id": post.json()["post"]["id"],
        "group_id": group_id,
    }


async def _grant(client, as_user, circle, can_view, can_like):
    response = await client.post(
        "/api/v1/permissions",
        json={
            "group": circle["group_id"],
            "resource": circle["post_id"],
            "can_view": can_view,
            "can_like": can_like,
        },
        headers=as_user(circle["author"]),
    )
    assert response.status_code == 201
    return response.json()["permission"]


async def test_member_likes_post(client, as_user, circle):
    await _grant(client, as_user, circle, can_view=True, can_like=True)
    friend, post_id = circle["friend"], circle["post_id"]

    liked = await client.put(f"/api/v1/likes/{post_id}", headers=as_user(friend))
    assert liked.status_code == 200
    assert liked.json()["like"]["user"] == str(friend)

    again = await client.put(f"/api/v1/likes/{post_id}", headers=as_user(friend))
    assert again.status_code == 409

    status = await client.get(f"/api/v1/likes/user/{post_id}", headers=as_user(friend))
    assert status.json() == {"liked": True}

    likes = await client.get(f"/api/v1/likes/{post_id}", headers=as_user(circle["author"]))
    assert [like["user"] for like in likes.json()] == [str(friend)]

    unliked = await client.delete(f"/api/v1/likes/{post_id}", headers=as_user(friend))
    assert unliked.json() == {"msg": "Unliked!"}
    assert (await client.delete(
        f"/api/v1/likes/{post_id}", headers=as_user(friend),
    )).status_code == 409


async def test_view_only_grant(client, as_user, circle):
    await _grant(client, as_user, circle, can_view=True, can_like=False)
    friend, post_id = circle["friend"], circle["post_id"]

    viewed = await client.get(f"/api/v1/posts/{post_id}", headers=as_user(friend))
    assert viewed.status_code == 200
    assert viewed.json()["content"] == "summit photos"

    refused = await client.put(f"/api/v1/likes/{post_id}", headers=as_user(friend))
    assert refused.status_code == 403
    assert refused.json()["error"]["category"] == "not_allowed"

    viewable = await client.get("/api/v1/permissions/viewable", headers=as_user(friend))
    likable = await client.get("/api/v1/permissions/likable", headers=as_user(friend))
    assert viewable.json() == [post_id]
    assert likable.json() == []


async def test_member_without_policy_gets_404(client, as_user, circle):
    response = await client.put(
        f"/api/v1/likes/{circle['post_id']}", headers=as_user(circle["friend"]),
    )
    assert response.status_code == 404


async def test_stranger_cannot_view_or_like(client, as_user, circle):
    await _grant(client, as_user, circle, can_view=True, can_like=True)
    stranger, post_id = uuid4(), circle["post_id"]

    assert (await client.get(
        f"/api/v1/posts/{post_id}", headers=as_user(stranger),
    )).status_code == 403
    assert (await client.put(
        f"/api/v1/likes/{post_id}", headers=as_user(stranger),
    )).status_code == 403


async def test_permissions_are_managed_by_author(client, as_user, circle):
    permission = await _grant(client, as_user, circle, can_view=False, can_like=False)
    friend, author = circle["friend"], circle["author"]

    assert (await client.get(
        f"/api/v1/permissions/{circle['post_id']}", headers=as_user(friend),
    )).status_code == 403

    patched = await client.patch(
        f"/api/v1/permissions/{permission['id']}",
        json={"can_like": True},
        headers=as_user(author),
    )
    assert patched.status_code == 200
    assert patched.json()["can_like"] is True
    assert patched.json()["can_view"] is False

    empty = await client.patch(
        f"/api/v1/permissions/{permission['id']}", json={}, headers=as_user(author),
    )
    assert empty.status_code == 400

    removed = await client.delete(
        f"/api/v1/permissions/{permission['id']}", headers=as_user(author),
    )
    assert removed.json() == {"msg": "Permission deleted successfully!"}


async def test_friend_listing(client, as_user, circle):
    friends = await client.get("/api/v1/friends", headers=as_user(circle["author"]))
    assert friends.json() == [str(circle["friend"])]
