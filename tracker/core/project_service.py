"""Project service: implements ProjectPort.

Projects are created for an existing owner. The owner is fixed for the
life of the project; edits only rename it.
"""

import logging
from collections.abc import Sequence

from .exceptions import EntityNotFoundError
from .models import Project
from .ports import ProjectPort, ProjectStorePort, UserStorePort

logger = logging.getLogger(__name__)


class ProjectService(ProjectPort):
    """Core implementation of ProjectPort."""

    def __init__(self, projects: ProjectStorePort, users: UserStorePort):
        """Initialize the project service.

        Args:
            projects: ProjectStorePort implementation for persistence.
            users: UserStorePort implementation for owner lookups.
        """
        self.projects = projects
        self.users = users

    async def add(self, name: str, owner_id: int) -> Project:
        """Create a project owned by an existing user.

        Raises:
            EntityNotFoundError: If the owner doesn't exist.
            ValueError: If the name is blank.
        """
        owner = await self.users.get_by_id(owner_id)
        if owner is None:
            raise EntityNotFoundError("user")

        project = await self.projects.save(Project(name=name, owner=owner))

        logger.info(
            f"Project {project.id} created",
            extra={"project_id": project.id, "owner_id": owner_id},
        )
        return project

    async def edit(self, project_id: int, name: str) -> Project:
        """Rename a project.

        Raises:
            EntityNotFoundError: If the project doesn't exist.
            ValueError: If the name is blank.
        """
        project = await self.get_by_id(project_id)
        project.rename(name)
        project = await self.projects.save(project)

        logger.info(f"Project {project_id} renamed", extra={"project_id": project_id})
        return project

    async def get_by_id(self, project_id: int) -> Project:
        """Retrieve a project.

        Raises:
            EntityNotFoundError: If the project doesn't exist.
        """
        project = await self.projects.get_by_id(project_id)
        if project is None:
            raise EntityNotFoundError("project")
        return project

    async def get_all(self) -> Sequence[Project]:
        """List all projects."""
        return await self.projects.get_all()

    async def remove_by_id(self, project_id: int) -> None:
        """Delete a project."""
        await self.projects.delete_by_id(project_id)
        logger.info(f"Project {project_id} removed", extra={"project_id": project_id})
