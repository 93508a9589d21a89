"""Unit tests for entity to DTO mapping.

Each DTO has a fixed field list; the tests pin both the values and the
exact shape.
"""

from dataclasses import fields
from datetime import date, timedelta

import pytest

from tracker.core.mappers import (
    MemberDto,
    MilestoneDto,
    ProjectDto,
    RoadmapDto,
    TaskDto,
    UserDto,
    member_to_dto,
    milestone_to_dto,
    project_to_dto,
    roadmap_to_dto,
    task_to_dto,
    user_to_dto,
)
from tracker.core.models import Member, Milestone, Project, Roadmap, Task, User


def field_names(dto_class: type) -> list[str]:
    return [f.name for f in fields(dto_class)]


@pytest.fixture
def user() -> User:
    return User(first_name="Ivan", last_name="Petrov", position="Boss", avatar="img-url", id=4)


@pytest.fixture
def project(user: User) -> Project:
    return Project(name="Tracker", owner=user, id=3)


@pytest.fixture
def member(project: Project, user: User) -> Member:
    member = Member.join(project, user, "Boss")
    member.id = 5
    return member


@pytest.fixture
def roadmap(project: Project) -> Roadmap:
    return Roadmap(name="Roadmap", start_date=date(2024, 1, 1), project=project, id=6)


@pytest.fixture
def milestone(roadmap: Roadmap) -> Milestone:
    today = date.today()
    return Milestone(
        name="Milestone",
        start_date=today,
        finish_date=today + timedelta(days=10),
        roadmap=roadmap,
        id=7,
    )


@pytest.fixture
def task(milestone: Milestone, member: Member) -> Task:
    return Task(
        id=2,
        name="Task",
        active=False,
        finished=False,
        milestone=milestone,
        responsible_member=member,
    )


class TestTaskMapper:
    """Tests for task_to_dto."""

    def test_map_task_to_task_dto(self, task: Task) -> None:
        dto = task_to_dto(task)

        assert dto.id == task.id
        assert dto.active == task.active
        assert dto.finished == task.finished
        assert dto.member_id == task.responsible_member.id
        assert dto.milestone_id == task.milestone.id
        assert dto.name == task.name
        assert dto.documents == ()
        assert len(fields(TaskDto)) == 7

    def test_task_dto_field_names(self) -> None:
        assert field_names(TaskDto) == [
            "id",
            "name",
            "active",
            "finished",
            "member_id",
            "milestone_id",
            "documents",
        ]

    def test_unsaved_task_maps_to_none_id(self, task: Task) -> None:
        task.id = None

        assert task_to_dto(task).id is None

    def test_to_dict_is_json_ready(self, task: Task) -> None:
        task.documents = ("spec.pdf", "notes.md")

        assert task_to_dto(task).to_dict() == {
            "id": 2,
            "name": "Task",
            "active": False,
            "finished": False,
            "member_id": 5,
            "milestone_id": 7,
            "documents": ["spec.pdf", "notes.md"],
        }


class TestOtherMappers:
    """Tests for the remaining entity mappers."""

    def test_user_to_dto(self, user: User) -> None:
        dto = user_to_dto(user)

        assert dto == UserDto(
            id=4, first_name="Ivan", last_name="Petrov", position="Boss", avatar="img-url"
        )
        assert len(fields(UserDto)) == 5

    def test_project_to_dto(self, project: Project) -> None:
        dto = project_to_dto(project)

        assert (dto.id, dto.name, dto.owner_id) == (3, "Tracker", 4)
        assert field_names(ProjectDto) == ["id", "name", "owner_id"]

    def test_member_to_dto(self, member: Member) -> None:
        dto = member_to_dto(member)

        assert dto.id == 5
        assert dto.position == "Boss"
        assert dto.first_name == "Ivan"
        assert dto.last_name == "Petrov"
        assert dto.avatar == "img-url"
        assert dto.project_id == 3
        assert dto.user_id == 4
        assert len(fields(MemberDto)) == 7

    def test_roadmap_to_dto_dates_serialize_as_iso(self, roadmap: Roadmap) -> None:
        data = roadmap_to_dto(roadmap).to_dict()

        assert data == {
            "id": 6,
            "name": "Roadmap",
            "start_date": "2024-01-01",
            "project_id": 3,
        }
        assert len(fields(RoadmapDto)) == 4

    def test_milestone_to_dto(self, milestone: Milestone) -> None:
        dto = milestone_to_dto(milestone)

        assert dto.roadmap_id == 6
        assert dto.finish_date - dto.start_date == timedelta(days=10)
        assert field_names(MilestoneDto) == [
            "id",
            "name",
            "start_date",
            "finish_date",
            "roadmap_id",
        ]

    def test_dtos_are_immutable(self, user: User) -> None:
        dto = user_to_dto(user)

        with pytest.raises(AttributeError):
            dto.position = "CEO"  # type: ignore[misc]
