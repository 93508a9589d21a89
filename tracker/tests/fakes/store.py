"""Fake store port implementations for testing.

In-memory stores that assign sequential IDs and record every call so
tests can assert on what the services did.
"""

from typing import Generic, Protocol, TypeVar

from tracker.core.models import Member, Milestone, Project, Roadmap, Task, User
from tracker.core.ports import (
    MemberStorePort,
    MilestoneStorePort,
    ProjectStorePort,
    RoadmapStorePort,
    TaskStorePort,
    UserStorePort,
)


class _Identified(Protocol):
    id: int | None


E = TypeVar("E", bound=_Identified)


class _InMemoryStore(Generic[E]):
    """Shared bookkeeping for the fake stores."""

    def __init__(self) -> None:
        self.records: dict[int, E] = {}
        self.saved: list[E] = []
        self.get_by_id_calls: list[int] = []
        self.deleted_ids: list[int] = []
        self._next_id = 1

    def seed(self, *entities: E) -> None:
        """Store entities directly, without recording a save.

        Entities that already carry an ID keep it.
        """
        for entity in entities:
            self._put(entity)

    def _put(self, entity: E) -> E:
        if entity.id is None:
            while self._next_id in self.records:
                self._next_id += 1
            entity.id = self._next_id
        self.records[entity.id] = entity
        self._next_id = max(self._next_id, entity.id + 1)
        return entity

    async def get_by_id(self, entity_id: int) -> E | None:
        self.get_by_id_calls.append(entity_id)
        return self.records.get(entity_id)

    async def save(self, entity: E) -> E:
        self.saved.append(entity)
        return self._put(entity)

    async def delete_by_id(self, entity_id: int) -> None:
        self.deleted_ids.append(entity_id)
        self.records.pop(entity_id, None)

    def reset(self) -> None:
        """Reset all collected data and statistics."""
        self.records.clear()
        self.saved.clear()
        self.get_by_id_calls.clear()
        self.deleted_ids.clear()
        self._next_id = 1


class FakeUserStorePort(_InMemoryStore[User], UserStorePort):
    """In-memory user store for testing."""

    async def get_all(self) -> list[User]:
        return [self.records[key] for key in sorted(self.records)]


class FakeProjectStorePort(_InMemoryStore[Project], ProjectStorePort):
    """In-memory project store for testing."""

    async def get_all(self) -> list[Project]:
        return [self.records[key] for key in sorted(self.records)]


class FakeMemberStorePort(_InMemoryStore[Member], MemberStorePort):
    """In-memory member store for testing.

    get_all_by_project returns members in insertion order unless a canned
    result was set with set_project_members.
    """

    def __init__(self) -> None:
        super().__init__()
        self.get_all_by_project_calls: list[Project] = []
        self.project_members: dict[int | None, list[Member]] = {}

    def set_project_members(self, project: Project, members: list[Member]) -> None:
        """Return exactly these members when the project is listed."""
        self.project_members[project.id] = members

    async def get_all_by_project(self, project: Project) -> list[Member]:
        self.get_all_by_project_calls.append(project)
        if project.id in self.project_members:
            return list(self.project_members[project.id])
        return [m for m in self.records.values() if m.project.id == project.id]

    def reset(self) -> None:
        super().reset()
        self.get_all_by_project_calls.clear()
        self.project_members.clear()


class FakeRoadmapStorePort(_InMemoryStore[Roadmap], RoadmapStorePort):
    """In-memory roadmap store for testing."""

    async def get_all_by_project(self, project: Project) -> list[Roadmap]:
        return [r for r in self.records.values() if r.project.id == project.id]


class FakeMilestoneStorePort(_InMemoryStore[Milestone], MilestoneStorePort):
    """In-memory milestone store for testing."""

    async def get_all_by_roadmap(self, roadmap: Roadmap) -> list[Milestone]:
        return [m for m in self.records.values() if m.roadmap.id == roadmap.id]


class FakeTaskStorePort(_InMemoryStore[Task], TaskStorePort):
    """In-memory task store for testing."""

    async def get_all_by_milestone(self, milestone: Milestone) -> list[Task]:
        return [t for t in self.records.values() if t.milestone.id == milestone.id]
