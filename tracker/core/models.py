"""Domain models for the business tracker.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.

Entities carry ``id=None`` until a store persists them and assigns an
integer identifier.
"""

from dataclasses import dataclass, field
from datetime import date


@dataclass
class User:
    """A person known to the tracker."""

    first_name: str
    last_name: str
    position: str  # role/title, e.g. "Boss"
    avatar: str  # image reference
    id: int | None = None

    def update_profile(
        self, first_name: str, last_name: str, position: str, avatar: str
    ) -> None:
        """Replace the user's profile fields. The identifier never changes."""
        self.first_name = first_name
        self.last_name = last_name
        self.position = position
        self.avatar = avatar


@dataclass
class Project:
    """A project owned by a user.

    The owner is fixed at creation; only the name is editable.
    """

    name: str
    owner: User
    id: int | None = None

    def __post_init__(self) -> None:
        """Validate project invariants on creation."""
        if not self.name or not self.name.strip():
            raise ValueError("name must be a non-empty string")

    def rename(self, name: str) -> None:
        """Change the project name."""
        if not name or not name.strip():
            raise ValueError("name must be a non-empty string")
        self.name = name


@dataclass
class Member:
    """A user's participation in a project with a position.

    The project and user references are set at creation and never
    reassigned. Position is the only field that changes after creation.
    """

    avatar: str
    first_name: str
    last_name: str
    position: str
    project: Project
    user: User
    id: int | None = None

    @classmethod
    def join(cls, project: Project, user: User, position: str) -> "Member":
        """Create a membership copying the user's display details."""
        return cls(
            avatar=user.avatar,
            first_name=user.first_name,
            last_name=user.last_name,
            position=position,
            project=project,
            user=user,
        )

    def change_position(self, position: str) -> None:
        """Move the member to a new position within the same project."""
        self.position = position


@dataclass
class Roadmap:
    """A plan attached to a project, split into milestones."""

    name: str
    start_date: date
    project: Project
    id: int | None = None


@dataclass
class Milestone:
    """A dated stage of a roadmap."""

    name: str
    start_date: date
    finish_date: date
    roadmap: Roadmap
    id: int | None = None

    def __post_init__(self) -> None:
        """Validate milestone invariants on creation or deserialization."""
        if self.finish_date < self.start_date:
            raise ValueError(
                f"finish_date ({self.finish_date}) cannot be before "
                f"start_date ({self.start_date})"
            )

    def reschedule(self, start_date: date, finish_date: date) -> None:
        """Move the milestone to a new date range."""
        if finish_date < start_date:
            raise ValueError(
                f"finish_date ({finish_date}) cannot be before "
                f"start_date ({start_date})"
            )
        self.start_date = start_date
        self.finish_date = finish_date


@dataclass
class Task:
    """A unit of work inside a milestone with one responsible member.

    The milestone and responsible member are fixed at creation.
    """

    name: str
    active: bool
    finished: bool
    milestone: Milestone
    responsible_member: Member
    documents: tuple[str, ...] = field(default_factory=tuple)  # document references
    id: int | None = None

    def __post_init__(self) -> None:
        """Validate task invariants on creation or deserialization."""
        if not self.name or not self.name.strip():
            raise ValueError("name must be a non-empty string")

    def update_state(self, name: str, active: bool, finished: bool) -> None:
        """Rename the task and set its progress flags."""
        if not name or not name.strip():
            raise ValueError("name must be a non-empty string")
        self.name = name
        self.active = active
        self.finished = finished
