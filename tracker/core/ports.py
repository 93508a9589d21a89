"""Port interfaces for the business tracker.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - UserStorePort, ProjectStorePort, MemberStorePort: Persist people,
     projects and memberships
   - RoadmapStorePort, MilestoneStorePort, TaskStorePort: Persist the
     planning hierarchy

2. **Driving Ports** (adapters/external systems call into core)
   - UserPort, ProjectPort, MemberPort, RoadmapPort, MilestonePort, TaskPort:
     Lifecycle operations invoked by the CLI
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import date

from .models import Member, Milestone, Project, Roadmap, Task, User


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class UserStorePort(ABC):
    """Port for persisting and querying users."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User | None:
        """Retrieve a user by ID.

        Returns:
            User if found, None otherwise.
        """

    @abstractmethod
    async def get_all(self) -> list[User]:
        """Retrieve all users ordered by ID."""

    @abstractmethod
    async def save(self, user: User) -> User:
        """Create or update a user.

        Assigns the identifier on first save.

        Returns:
            The persisted user.
        """

    @abstractmethod
    async def delete_by_id(self, user_id: int) -> None:
        """Delete a user. Unknown IDs are ignored."""


class ProjectStorePort(ABC):
    """Port for persisting and querying projects."""

    @abstractmethod
    async def get_by_id(self, project_id: int) -> Project | None:
        """Retrieve a project by ID.

        Returns:
            Project if found, None otherwise.
        """

    @abstractmethod
    async def get_all(self) -> list[Project]:
        """Retrieve all projects ordered by ID."""

    @abstractmethod
    async def save(self, project: Project) -> Project:
        """Create or update a project.

        Assigns the identifier on first save.

        Returns:
            The persisted project.
        """

    @abstractmethod
    async def delete_by_id(self, project_id: int) -> None:
        """Delete a project. Unknown IDs are ignored."""


class MemberStorePort(ABC):
    """Port for persisting and querying project memberships.

    Adapters implementing this port should provide atomic storage of
    Member objects and rebuild their project and user references on read.

    Implementations must handle:
    - Identifier assignment on first save
    - Atomic save and delete (one transaction per call)
    - Reference integrity between members, projects and users
    """

    @abstractmethod
    async def get_by_id(self, member_id: int) -> Member | None:
        """Retrieve a member by ID.

        Args:
            member_id: Identifier of the member.

        Returns:
            Member object if found, None otherwise.

        Raises:
            Exception: If the store is unavailable.
        """

    @abstractmethod
    async def get_all_by_project(self, project: Project) -> list[Member]:
        """Retrieve all members of a project.

        Args:
            project: The project whose members to list.

        Returns:
            List of Member objects in store order (ascending ID).
            Empty list if the project has no members.

        Raises:
            Exception: If the store is unavailable.
        """

    @abstractmethod
    async def save(self, member: Member) -> Member:
        """Create or update a member.

        A member without an ID is inserted and receives a store-assigned
        identifier; a member with an ID replaces the stored record.

        Args:
            member: Member to persist.

        Returns:
            The persisted member, carrying its identifier.

        Raises:
            Exception: If the referenced project or user is not stored or
                the store is unavailable.
        """

    @abstractmethod
    async def delete_by_id(self, member_id: int) -> None:
        """Delete a member by ID.

        Deleting an unknown ID is a no-op.

        Args:
            member_id: Identifier of the member.

        Raises:
            EntityInUseError: If a task still names the member as responsible.
            Exception: If the store is unavailable.
        """


class RoadmapStorePort(ABC):
    """Port for persisting and querying roadmaps."""

    @abstractmethod
    async def get_by_id(self, roadmap_id: int) -> Roadmap | None:
        """Retrieve a roadmap by ID, or None."""

    @abstractmethod
    async def get_all_by_project(self, project: Project) -> list[Roadmap]:
        """Retrieve all roadmaps of a project ordered by ID."""

    @abstractmethod
    async def save(self, roadmap: Roadmap) -> Roadmap:
        """Create or update a roadmap; assigns the ID on first save."""

    @abstractmethod
    async def delete_by_id(self, roadmap_id: int) -> None:
        """Delete a roadmap. Unknown IDs are ignored."""


class MilestoneStorePort(ABC):
    """Port for persisting and querying milestones."""

    @abstractmethod
    async def get_by_id(self, milestone_id: int) -> Milestone | None:
        """Retrieve a milestone by ID, or None."""

    @abstractmethod
    async def get_all_by_roadmap(self, roadmap: Roadmap) -> list[Milestone]:
        """Retrieve all milestones of a roadmap ordered by ID."""

    @abstractmethod
    async def save(self, milestone: Milestone) -> Milestone:
        """Create or update a milestone; assigns the ID on first save."""

    @abstractmethod
    async def delete_by_id(self, milestone_id: int) -> None:
        """Delete a milestone. Unknown IDs are ignored."""


class TaskStorePort(ABC):
    """Port for persisting and querying tasks."""

    @abstractmethod
    async def get_by_id(self, task_id: int) -> Task | None:
        """Retrieve a task by ID, or None."""

    @abstractmethod
    async def get_all_by_milestone(self, milestone: Milestone) -> list[Task]:
        """Retrieve all tasks of a milestone ordered by ID."""

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Create or update a task; assigns the ID on first save."""

    @abstractmethod
    async def delete_by_id(self, task_id: int) -> None:
        """Delete a task. Unknown IDs are ignored."""


# ============================================================================
# DRIVING PORTS (Adapters/external systems call into core)
# ============================================================================


class UserPort(ABC):
    """Port for user lifecycle operations."""

    @abstractmethod
    async def add(
        self, first_name: str, last_name: str, position: str, avatar: str
    ) -> User:
        """Register a new user."""

    @abstractmethod
    async def edit(
        self,
        user_id: int,
        first_name: str,
        last_name: str,
        position: str,
        avatar: str,
    ) -> User:
        """Update a user's profile.

        Raises:
            EntityNotFoundError: If the user doesn't exist.
        """

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User:
        """Retrieve a user.

        Raises:
            EntityNotFoundError: If the user doesn't exist.
        """

    @abstractmethod
    async def get_all(self) -> Sequence[User]:
        """List all users."""

    @abstractmethod
    async def remove_by_id(self, user_id: int) -> None:
        """Delete a user."""


class ProjectPort(ABC):
    """Port for project lifecycle operations."""

    @abstractmethod
    async def add(self, name: str, owner_id: int) -> Project:
        """Create a project owned by an existing user.

        Raises:
            EntityNotFoundError: If the owner doesn't exist.
        """

    @abstractmethod
    async def edit(self, project_id: int, name: str) -> Project:
        """Rename a project.

        Raises:
            EntityNotFoundError: If the project doesn't exist.
        """

    @abstractmethod
    async def get_by_id(self, project_id: int) -> Project:
        """Retrieve a project.

        Raises:
            EntityNotFoundError: If the project doesn't exist.
        """

    @abstractmethod
    async def get_all(self) -> Sequence[Project]:
        """List all projects."""

    @abstractmethod
    async def remove_by_id(self, project_id: int) -> None:
        """Delete a project."""


class MemberPort(ABC):
    """Port for member lifecycle operations.

    Driving port: the CLI invokes these methods to attach users to
    projects, change their positions and detach them again.

    Implementations live in the core (member_service.py).
    """

    @abstractmethod
    async def add(self, position: str, project_id: int, user_id: int) -> Member:
        """Attach an existing user to an existing project.

        Args:
            position: Role of the user within the project.
            project_id: Identifier of the project.
            user_id: Identifier of the user.

        Returns:
            The persisted Member with its store-assigned ID.

        Raises:
            EntityNotFoundError: If the project or the user doesn't exist.
                Nothing is saved in that case.
        """

    @abstractmethod
    async def edit(self, member_id: int, position: str) -> Member:
        """Change a member's position.

        Project and user references are left untouched.

        Raises:
            EntityNotFoundError: If the member doesn't exist.
        """

    @abstractmethod
    async def get_by_id(self, member_id: int) -> Member:
        """Retrieve a member without modifying it.

        Raises:
            EntityNotFoundError: If the member doesn't exist.
        """

    @abstractmethod
    async def get_all_by_project_id(self, project_id: int) -> Sequence[Member]:
        """List the members of a project in store order.

        Raises:
            EntityNotFoundError: If the project doesn't exist.
        """

    @abstractmethod
    async def remove_by_id(self, member_id: int) -> None:
        """Delete a member. No existence check is made."""


class RoadmapPort(ABC):
    """Port for roadmap lifecycle operations."""

    @abstractmethod
    async def add(self, name: str, start_date: date, project_id: int) -> Roadmap:
        """Create a roadmap for an existing project."""

    @abstractmethod
    async def edit(self, roadmap_id: int, name: str, start_date: date) -> Roadmap:
        """Rename or reschedule a roadmap."""

    @abstractmethod
    async def get_by_id(self, roadmap_id: int) -> Roadmap:
        """Retrieve a roadmap."""

    @abstractmethod
    async def get_all_by_project_id(self, project_id: int) -> Sequence[Roadmap]:
        """List the roadmaps of a project."""

    @abstractmethod
    async def remove_by_id(self, roadmap_id: int) -> None:
        """Delete a roadmap."""


class MilestonePort(ABC):
    """Port for milestone lifecycle operations."""

    @abstractmethod
    async def add(
        self, name: str, start_date: date, finish_date: date, roadmap_id: int
    ) -> Milestone:
        """Create a milestone on an existing roadmap."""

    @abstractmethod
    async def edit(
        self, milestone_id: int, name: str, start_date: date, finish_date: date
    ) -> Milestone:
        """Rename or reschedule a milestone."""

    @abstractmethod
    async def get_by_id(self, milestone_id: int) -> Milestone:
        """Retrieve a milestone."""

    @abstractmethod
    async def get_all_by_roadmap_id(self, roadmap_id: int) -> Sequence[Milestone]:
        """List the milestones of a roadmap."""

    @abstractmethod
    async def remove_by_id(self, milestone_id: int) -> None:
        """Delete a milestone."""


class TaskPort(ABC):
    """Port for task lifecycle operations."""

    @abstractmethod
    async def add(self, name: str, milestone_id: int, member_id: int) -> Task:
        """Create a task in a milestone, assigned to a member."""

    @abstractmethod
    async def edit(
        self, task_id: int, name: str, active: bool, finished: bool
    ) -> Task:
        """Rename a task or change its progress flags."""

    @abstractmethod
    async def get_by_id(self, task_id: int) -> Task:
        """Retrieve a task."""

    @abstractmethod
    async def get_all_by_milestone_id(self, milestone_id: int) -> Sequence[Task]:
        """List the tasks of a milestone."""

    @abstractmethod
    async def remove_by_id(self, task_id: int) -> None:
        """Delete a task."""
