"""Entity to transfer-object mapping.

DTOs are flat: references to other entities are replaced by their IDs.
Each DTO has a fixed field list, so outer layers can rely on its exact
shape.
"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

from .models import Member, Milestone, Project, Roadmap, Task, User


def _jsonable(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, tuple):
        return list(value)
    return value


@dataclass(frozen=True)
class _Dto:
    def to_dict(self) -> dict[str, Any]:
        """Return the fields as JSON-ready values."""
        return {key: _jsonable(value) for key, value in asdict(self).items()}


@dataclass(frozen=True)
class UserDto(_Dto):
    id: int | None
    first_name: str
    last_name: str
    position: str
    avatar: str


@dataclass(frozen=True)
class ProjectDto(_Dto):
    id: int | None
    name: str
    owner_id: int | None


@dataclass(frozen=True)
class MemberDto(_Dto):
    id: int | None
    avatar: str
    first_name: str
    last_name: str
    position: str
    project_id: int | None
    user_id: int | None


@dataclass(frozen=True)
class RoadmapDto(_Dto):
    id: int | None
    name: str
    start_date: date
    project_id: int | None


@dataclass(frozen=True)
class MilestoneDto(_Dto):
    id: int | None
    name: str
    start_date: date
    finish_date: date
    roadmap_id: int | None


@dataclass(frozen=True)
class TaskDto(_Dto):
    id: int | None
    name: str
    active: bool
    finished: bool
    member_id: int | None
    milestone_id: int | None
    documents: tuple[str, ...]


def user_to_dto(user: User) -> UserDto:
    return UserDto(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        position=user.position,
        avatar=user.avatar,
    )


def project_to_dto(project: Project) -> ProjectDto:
    return ProjectDto(id=project.id, name=project.name, owner_id=project.owner.id)


def member_to_dto(member: Member) -> MemberDto:
    return MemberDto(
        id=member.id,
        avatar=member.avatar,
        first_name=member.first_name,
        last_name=member.last_name,
        position=member.position,
        project_id=member.project.id,
        user_id=member.user.id,
    )


def roadmap_to_dto(roadmap: Roadmap) -> RoadmapDto:
    return RoadmapDto(
        id=roadmap.id,
        name=roadmap.name,
        start_date=roadmap.start_date,
        project_id=roadmap.project.id,
    )


def milestone_to_dto(milestone: Milestone) -> MilestoneDto:
    return MilestoneDto(
        id=milestone.id,
        name=milestone.name,
        start_date=milestone.start_date,
        finish_date=milestone.finish_date,
        roadmap_id=milestone.roadmap.id,
    )


def task_to_dto(task: Task) -> TaskDto:
    """Flatten a task, replacing its milestone and member by their IDs."""
    return TaskDto(
        id=task.id,
        name=task.name,
        active=task.active,
        finished=task.finished,
        member_id=task.responsible_member.id,
        milestone_id=task.milestone.id,
        documents=tuple(task.documents),
    )
