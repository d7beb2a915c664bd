"""Grouping Concept: verifies group invariants and membership guards.

Tests cover:
    - create: empty members, creator recorded, NameConflict on duplicate name
    - add/remove: AlreadyMember, NotMember, NotFound, round trip restores members
    - assert_author_is_creator: NotFound vs Forbidden vs silent success
    - lookups: by creator, by member, by name, is_member
"""

from uuid import uuid4

import pytest

from circlenet.core.errors import (
    AlreadyMemberError,
    ForbiddenError,
    NameConflictError,
    NotAllowedError,
    NotFoundError,
    NotMemberError,
)


async def test_create_starts_with_empty_members(grouping):
    creator = uuid4()
    group = await grouping.create("alpha", creator)

    stored = await grouping.get_group(group.id)
    assert stored.members == []
    assert stored.creator == creator
    assert stored.name == "alpha"


async def test_duplicate_name_is_a_conflict(grouping):
    await grouping.create("alpha", uuid4())
    with pytest.raises(NameConflictError) as exc:
        await grouping.create("alpha", uuid4())
    assert isinstance(exc.value, NotAllowedError)
    assert len(await grouping.groups.read_many({"name": "alpha"})) == 1


async def test_add_twice_fails_and_keeps_single_entry(grouping):
    group = await grouping.create("alpha", uuid4())
    account = uuid4()

    await grouping.add_to_group(group.id, account)
    with pytest.raises(AlreadyMemberError):
        await grouping.add_to_group(group.id, account)

    stored = await grouping.get_group(group.id)
    assert stored.members.count(str(account)) == 1


async def test_remove_non_member_fails_and_leaves_members(grouping):
    group = await grouping.create("alpha", uuid4())
    member = uuid4()
    await grouping.add_to_group(group.id, member)

    with pytest.raises(NotMemberError):
        await grouping.remove_from_group(group.id, uuid4())

    stored = await grouping.get_group(group.id)
    assert stored.members == [str(member)]


async def test_add_then_remove_restores_members(grouping):
    group = await grouping.create("alpha", uuid4())
    existing, added = uuid4(), uuid4()
    await grouping.add_to_group(group.id, existing)
    before = (await grouping.get_group(group.id)).members

    await grouping.add_to_group(group.id, added)
    await grouping.remove_from_group(group.id, added)

    assert (await grouping.get_group(group.id)).members == before


async def test_membership_changes_on_missing_group_are_not_found(grouping):
    with pytest.raises(NotFoundError):
        await grouping.add_to_group(uuid4(), uuid4())
    with pytest.raises(NotFoundError):
        await grouping.remove_from_group(uuid4(), uuid4())


async def test_creator_check_scenario(grouping):
    u1, u2 = uuid4(), uuid4()
    group = await grouping.create("alpha", u1)

    await grouping.add_to_group(group.id, u2)
    assert (await grouping.get_group(group.id)).members == [str(u2)]

    with pytest.raises(ForbiddenError):
        await grouping.assert_author_is_creator(group.id, u2)
    await grouping.assert_author_is_creator(group.id, u1)


async def test_creator_check_on_missing_group_is_not_found(grouping):
    with pytest.raises(NotFoundError):
        await grouping.assert_author_is_creator(uuid4(), uuid4())


async def test_delete_removes_group(grouping):
    group = await grouping.create("alpha", uuid4())
    result = await grouping.delete(group.id)
    assert result == {"msg": "Group deleted successfully!"}
    with pytest.raises(NotFoundError):
        await grouping.get_group(group.id)


async def test_name_is_reusable_after_delete(grouping):
    group = await grouping.create("alpha", uuid4())
    await grouping.delete(group.id)
    again = await grouping.create("alpha", uuid4())
    assert again.id != group.id


async def test_groups_by_creator(grouping):
    creator = uuid4()
    await grouping.create("alpha", creator)
    await grouping.create("beta", creator)
    await grouping.create("gamma", uuid4())

    names = {g.name for g in await grouping.get_groups_by_creator(creator)}
    assert names == {"alpha", "beta"}


async def test_groups_for_member_and_is_member(grouping):
    member = uuid4()
    alpha = await grouping.create("alpha", uuid4())
    beta = await grouping.create("beta", uuid4())
    await grouping.add_to_group(alpha.id, member)

    assert [g.id for g in await grouping.get_groups_for_member(member)] == [alpha.id]
    assert await grouping.is_member(alpha.id, member)
    assert not await grouping.is_member(beta.id, member)
    assert not await grouping.is_member(uuid4(), member)


async def test_get_group_by_name(grouping):
    group = await grouping.create("alpha", uuid4())
    assert (await grouping.get_group_by_name("alpha")).id == group.id
    with pytest.raises(NotFoundError):
        await grouping.get_group_by_name("missing")
