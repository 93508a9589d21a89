"""CLI command implementations for business tracker management.

Provides human-initiated actions through command-line interface.

This adapter maps CLI commands (add-member, edit-member, list-members, ...)
to the core service ports. It handles CLI-specific formatting and error
reporting: entities are returned as DTO dictionaries, and missing entities
or invalid values become error results instead of exceptions.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import date
from typing import Any

from tracker.core.exceptions import EntityNotFoundError
from tracker.core.mappers import (
    member_to_dto,
    milestone_to_dto,
    project_to_dto,
    roadmap_to_dto,
    task_to_dto,
    user_to_dto,
)
from tracker.core.ports import (
    MemberPort,
    MilestonePort,
    ProjectPort,
    RoadmapPort,
    TaskPort,
    UserPort,
)

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to the service ports."""

    def __init__(
        self,
        users: UserPort,
        projects: ProjectPort,
        members: MemberPort,
        roadmaps: RoadmapPort,
        milestones: MilestonePort,
        tasks: TaskPort,
    ):
        """Initialize the CLI command handler.

        Args:
            users: UserPort implementation.
            projects: ProjectPort implementation.
            members: MemberPort implementation.
            roadmaps: RoadmapPort implementation.
            milestones: MilestonePort implementation.
            tasks: TaskPort implementation.
        """
        self.users = users
        self.projects = projects
        self.members = members
        self.roadmaps = roadmaps
        self.milestones = milestones
        self.tasks = tasks

    async def _execute(
        self, operation: str, action: Callable[[], Awaitable[Any]]
    ) -> dict[str, Any]:
        """Run an action and wrap its outcome in a result dictionary."""
        try:
            data = await action()
        except (EntityNotFoundError, ValueError) as e:
            logger.error(f"{operation} failed: {e}")
            return {"status": "error", "operation": operation, "message": str(e)}

        result: dict[str, Any] = {"status": "success", "operation": operation}
        if data is not None:
            result["data"] = data
        return result

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def add_user(
        self, first_name: str, last_name: str, position: str, avatar: str = ""
    ) -> dict[str, Any]:
        """Register a user via CLI."""

        async def action() -> dict[str, Any]:
            user = await self.users.add(first_name, last_name, position, avatar)
            return user_to_dto(user).to_dict()

        return await self._execute("add_user", action)

    async def get_user(self, user_id: int) -> dict[str, Any]:
        async def action() -> dict[str, Any]:
            return user_to_dto(await self.users.get_by_id(user_id)).to_dict()

        return await self._execute("get_user", action)

    async def list_users(self) -> dict[str, Any]:
        async def action() -> list[dict[str, Any]]:
            return [user_to_dto(u).to_dict() for u in await self.users.get_all()]

        return await self._execute("list_users", action)

    async def remove_user(self, user_id: int) -> dict[str, Any]:
        return await self._execute(
            "remove_user", lambda: self.users.remove_by_id(user_id)
        )

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    async def add_project(self, name: str, owner_id: int) -> dict[str, Any]:
        """Create a project via CLI."""

        async def action() -> dict[str, Any]:
            project = await self.projects.add(name, owner_id)
            return project_to_dto(project).to_dict()

        return await self._execute("add_project", action)

    async def get_project(self, project_id: int) -> dict[str, Any]:
        async def action() -> dict[str, Any]:
            return project_to_dto(await self.projects.get_by_id(project_id)).to_dict()

        return await self._execute("get_project", action)

    async def list_projects(self) -> dict[str, Any]:
        async def action() -> list[dict[str, Any]]:
            return [project_to_dto(p).to_dict() for p in await self.projects.get_all()]

        return await self._execute("list_projects", action)

    async def remove_project(self, project_id: int) -> dict[str, Any]:
        return await self._execute(
            "remove_project", lambda: self.projects.remove_by_id(project_id)
        )

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    async def add_member(
        self, position: str, project_id: int, user_id: int, verbose: bool = False
    ) -> dict[str, Any]:
        """Attach a user to a project via CLI.

        Args:
            position: Role of the user within the project.
            project_id: Identifier of the project.
            user_id: Identifier of the user.
            verbose: If True, log additional information.

        Returns:
            Dictionary with status and the new member, or an error message.
        """

        async def action() -> dict[str, Any]:
            member = await self.members.add(position, project_id, user_id)
            if verbose:
                logger.info(
                    f"Added member {member.id}",
                    extra={"project_id": project_id, "user_id": user_id},
                )
            return member_to_dto(member).to_dict()

        return await self._execute("add_member", action)

    async def edit_member(self, member_id: int, position: str) -> dict[str, Any]:
        """Change a member's position via CLI."""

        async def action() -> dict[str, Any]:
            return member_to_dto(await self.members.edit(member_id, position)).to_dict()

        return await self._execute("edit_member", action)

    async def get_member(self, member_id: int) -> dict[str, Any]:
        async def action() -> dict[str, Any]:
            return member_to_dto(await self.members.get_by_id(member_id)).to_dict()

        return await self._execute("get_member", action)

    async def list_members(self, project_id: int) -> dict[str, Any]:
        """List the members of a project via CLI."""

        async def action() -> list[dict[str, Any]]:
            members = await self.members.get_all_by_project_id(project_id)
            return [member_to_dto(m).to_dict() for m in members]

        return await self._execute("list_members", action)

    async def remove_member(self, member_id: int) -> dict[str, Any]:
        return await self._execute(
            "remove_member", lambda: self.members.remove_by_id(member_id)
        )

    # ------------------------------------------------------------------
    # Roadmaps and milestones
    # ------------------------------------------------------------------

    async def add_roadmap(
        self, name: str, start_date: str, project_id: int
    ) -> dict[str, Any]:
        """Create a roadmap via CLI. Dates are ISO strings (YYYY-MM-DD)."""

        async def action() -> dict[str, Any]:
            roadmap = await self.roadmaps.add(
                name, date.fromisoformat(start_date), project_id
            )
            return roadmap_to_dto(roadmap).to_dict()

        return await self._execute("add_roadmap", action)

    async def list_roadmaps(self, project_id: int) -> dict[str, Any]:
        async def action() -> list[dict[str, Any]]:
            roadmaps = await self.roadmaps.get_all_by_project_id(project_id)
            return [roadmap_to_dto(r).to_dict() for r in roadmaps]

        return await self._execute("list_roadmaps", action)

    async def add_milestone(
        self, name: str, start_date: str, finish_date: str, roadmap_id: int
    ) -> dict[str, Any]:
        async def action() -> dict[str, Any]:
            milestone = await self.milestones.add(
                name,
                date.fromisoformat(start_date),
                date.fromisoformat(finish_date),
                roadmap_id,
            )
            return milestone_to_dto(milestone).to_dict()

        return await self._execute("add_milestone", action)

    async def list_milestones(self, roadmap_id: int) -> dict[str, Any]:
        async def action() -> list[dict[str, Any]]:
            milestones = await self.milestones.get_all_by_roadmap_id(roadmap_id)
            return [milestone_to_dto(m).to_dict() for m in milestones]

        return await self._execute("list_milestones", action)

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def add_task(
        self, name: str, milestone_id: int, member_id: int
    ) -> dict[str, Any]:
        async def action() -> dict[str, Any]:
            task = await self.tasks.add(name, milestone_id, member_id)
            return task_to_dto(task).to_dict()

        return await self._execute("add_task", action)

    async def edit_task(
        self, task_id: int, name: str, active: bool, finished: bool
    ) -> dict[str, Any]:
        async def action() -> dict[str, Any]:
            task = await self.tasks.edit(task_id, name, active, finished)
            return task_to_dto(task).to_dict()

        return await self._execute("edit_task", action)

    async def get_task(self, task_id: int) -> dict[str, Any]:
        async def action() -> dict[str, Any]:
            return task_to_dto(await self.tasks.get_by_id(task_id)).to_dict()

        return await self._execute("get_task", action)

    async def list_tasks(self, milestone_id: int) -> dict[str, Any]:
        async def action() -> list[dict[str, Any]]:
            tasks = await self.tasks.get_all_by_milestone_id(milestone_id)
            return [task_to_dto(t).to_dict() for t in tasks]

        return await self._execute("list_tasks", action)

    async def remove_task(self, task_id: int) -> dict[str, Any]:
        return await self._execute(
            "remove_task", lambda: self.tasks.remove_by_id(task_id)
        )


# Command name -> (handler method, required args, optional args)
COMMANDS: dict[str, tuple[str, tuple[str, ...], tuple[str, ...]]] = {
    "add-user": ("add_user", ("first_name", "last_name", "position"), ("avatar",)),
    "get-user": ("get_user", ("user_id",), ()),
    "list-users": ("list_users", (), ()),
    "remove-user": ("remove_user", ("user_id",), ()),
    "add-project": ("add_project", ("name", "owner_id"), ()),
    "get-project": ("get_project", ("project_id",), ()),
    "list-projects": ("list_projects", (), ()),
    "remove-project": ("remove_project", ("project_id",), ()),
    "add-member": ("add_member", ("position", "project_id", "user_id"), ("verbose",)),
    "edit-member": ("edit_member", ("member_id", "position"), ()),
    "get-member": ("get_member", ("member_id",), ()),
    "list-members": ("list_members", ("project_id",), ()),
    "remove-member": ("remove_member", ("member_id",), ()),
    "add-roadmap": ("add_roadmap", ("name", "start_date", "project_id"), ()),
    "list-roadmaps": ("list_roadmaps", ("project_id",), ()),
    "add-milestone": (
        "add_milestone",
        ("name", "start_date", "finish_date", "roadmap_id"),
        (),
    ),
    "list-milestones": ("list_milestones", ("roadmap_id",), ()),
    "add-task": ("add_task", ("name", "milestone_id", "member_id"), ()),
    "edit-task": ("edit_task", ("task_id", "name", "active", "finished"), ()),
    "get-task": ("get_task", ("task_id",), ()),
    "list-tasks": ("list_tasks", ("milestone_id",), ()),
    "remove-task": ("remove_task", ("task_id",), ()),
}


async def run_command(
    handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Run a CLI command.

    Entry point for executing CLI commands. Maps command names to handler methods.

    Args:
        handler: CLICommandHandler wired to the services.
        command: Command name (e.g. 'add-member', 'list-members').
        args: Dictionary of command arguments.

    Returns:
        Dictionary with command result.

    Raises:
        ValueError: If command is not recognized or a required argument is missing.
    """
    if command not in COMMANDS:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")

    method_name, required, optional = COMMANDS[command]

    missing = [name for name in required if name not in args]
    if missing:
        raise ValueError(f"Missing required parameter: {', '.join(missing)}")

    kwargs = {name: args[name] for name in (*required, *optional) if name in args}
    return await getattr(handler, method_name)(**kwargs)
