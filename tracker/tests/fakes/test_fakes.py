"""Unit tests for fake store implementations.

These tests verify that the fakes behave like real stores, so they can be
used confidently in tests of core domain logic.
"""

import pytest

from tracker.core.models import Member, Project, User
from tracker.tests.fakes import (
    FakeMemberStorePort,
    FakeProjectStorePort,
    FakeUserStorePort,
)


@pytest.fixture
def user() -> User:
    return User(first_name="Ivan", last_name="Petrov", position="Boss", avatar="img-url")


class TestFakeUserStorePort:
    @pytest.mark.asyncio
    async def test_save_assigns_sequential_ids(self, user: User) -> None:
        store = FakeUserStorePort()
        other = User(first_name="Max", last_name="Schulz", position="Dev", avatar="img")

        await store.save(user)
        await store.save(other)

        assert (user.id, other.id) == (1, 2)
        assert store.saved == [user, other]

    @pytest.mark.asyncio
    async def test_resave_keeps_id(self, user: User) -> None:
        store = FakeUserStorePort()
        await store.save(user)

        user.position = "CEO"
        await store.save(user)

        assert user.id == 1
        assert len(store.records) == 1

    @pytest.mark.asyncio
    async def test_seed_respects_existing_ids(self, user: User) -> None:
        store = FakeUserStorePort()
        user.id = 10
        store.seed(user)

        new_user = await store.save(
            User(first_name="Max", last_name="Schulz", position="Dev", avatar="img")
        )

        assert new_user.id == 11
        assert store.saved == [new_user]

    @pytest.mark.asyncio
    async def test_get_and_delete_are_recorded(self, user: User) -> None:
        store = FakeUserStorePort()
        store.seed(user)

        assert await store.get_by_id(1) is user
        assert await store.get_by_id(2) is None
        await store.delete_by_id(1)
        await store.delete_by_id(1)

        assert store.get_by_id_calls == [1, 2]
        assert store.deleted_ids == [1, 1]
        assert await store.get_all() == []

    @pytest.mark.asyncio
    async def test_reset(self, user: User) -> None:
        store = FakeUserStorePort()
        await store.save(user)

        store.reset()

        assert store.records == {}
        assert store.saved == []


class TestFakeMemberStorePort:
    @pytest.mark.asyncio
    async def test_lists_members_by_project(self, user: User) -> None:
        projects = FakeProjectStorePort()
        first = Project(name="first", owner=user)
        second = Project(name="second", owner=user)
        projects.seed(first, second)

        store = FakeMemberStorePort()
        boss = await store.save(Member.join(first, user, "Boss"))
        await store.save(Member.join(second, user, "Dev"))

        assert await store.get_all_by_project(first) == [boss]
        assert store.get_all_by_project_calls == [first]

    @pytest.mark.asyncio
    async def test_canned_project_members(self, user: User) -> None:
        project = Project(name="p", owner=user, id=1)
        canned = [Member.join(project, user, "CTO")]
        store = FakeMemberStorePort()

        store.set_project_members(project, canned)

        assert await store.get_all_by_project(project) == canned
