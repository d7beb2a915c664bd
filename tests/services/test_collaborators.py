"""Posting & Friending: the collaborators the authorization chains depend on.

Tests cover:
    - assert_author_is_user: NotFound for missing posts, Forbidden for non-authors
    - Friend request lifecycle and assert_friendship_exists in both directions
"""

from uuid import uuid4

import pytest

from circlenet.core.errors import ForbiddenError, NotAllowedError, NotFoundError


async def test_author_assertion(posting):
    author = uuid4()
    post = await posting.create(author, "hello")

    await posting.assert_author_is_user(post.id, author)
    with pytest.raises(ForbiddenError):
        await posting.assert_author_is_user(post.id, uuid4())
    with pytest.raises(NotFoundError):
        await posting.assert_author_is_user(uuid4(), author)


async def test_posts_by_author_and_delete(posting):
    author = uuid4()
    post = await posting.create(author, "mine")
    await posting.create(uuid4(), "theirs")

    assert [p.id for p in await posting.get_by_author(author)] == [post.id]
    await posting.delete(post.id)
    assert await posting.get_by_author(author) == []
    assert len(await posting.get_posts()) == 1


async def test_accepted_request_makes_symmetric_friendship(friending):
    a, b = uuid4(), uuid4()
    await friending.send_request(a, b)
    assert len(await friending.get_requests(b)) == 1

    await friending.accept_request(a, b)

    await friending.assert_friendship_exists(a, b)
    await friending.assert_friendship_exists(b, a)
    assert await friending.get_friends(a) == [b]
    assert await friending.get_friends(b) == [a]
    assert await friending.get_requests(b) == []


async def test_request_guards(friending):
    a, b = uuid4(), uuid4()
    with pytest.raises(NotAllowedError):
        await friending.send_request(a, a)

    await friending.send_request(a, b)
    with pytest.raises(NotAllowedError):
        await friending.send_request(b, a)

    await friending.accept_request(a, b)
    with pytest.raises(NotAllowedError):
        await friending.send_request(a, b)


async def test_reject_and_missing_request(friending):
    a, b = uuid4(), uuid4()
    await friending.send_request(a, b)
    await friending.reject_request(a, b)

    with pytest.raises(NotFoundError):
        await friending.accept_request(a, b)
    with pytest.raises(ForbiddenError):
        await friending.assert_friendship_exists(a, b)


async def test_remove_friend(friending):
    a, b = uuid4(), uuid4()
    await friending.send_request(a, b)
    await friending.accept_request(a, b)

    await friending.remove_friend(b, a)

    with pytest.raises(ForbiddenError):
        await friending.assert_friendship_exists(a, b)
    with pytest.raises(NotFoundError):
        await friending.remove_friend(a, b)
