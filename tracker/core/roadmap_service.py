"""Roadmap service: implements RoadmapPort."""

import logging
from collections.abc import Sequence
from datetime import date

from .exceptions import EntityNotFoundError
from .models import Project, Roadmap
from .ports import ProjectStorePort, RoadmapPort, RoadmapStorePort

logger = logging.getLogger(__name__)


class RoadmapService(RoadmapPort):
    """Core implementation of RoadmapPort.

    A roadmap always belongs to the project it was created for.
    """

    def __init__(self, roadmaps: RoadmapStorePort, projects: ProjectStorePort):
        self.roadmaps = roadmaps
        self.projects = projects

    async def add(self, name: str, start_date: date, project_id: int) -> Roadmap:
        """Create a roadmap for an existing project.

        Raises:
            EntityNotFoundError: If the project doesn't exist.
        """
        project = await self._require_project(project_id)
        roadmap = await self.roadmaps.save(
            Roadmap(name=name, start_date=start_date, project=project)
        )

        logger.info(
            f"Roadmap {roadmap.id} created for project {project_id}",
            extra={"roadmap_id": roadmap.id, "project_id": project_id},
        )
        return roadmap

    async def edit(self, roadmap_id: int, name: str, start_date: date) -> Roadmap:
        """Rename or reschedule a roadmap.

        Raises:
            EntityNotFoundError: If the roadmap doesn't exist.
        """
        roadmap = await self.get_by_id(roadmap_id)
        roadmap.name = name
        roadmap.start_date = start_date
        roadmap = await self.roadmaps.save(roadmap)

        logger.info(f"Roadmap {roadmap_id} updated", extra={"roadmap_id": roadmap_id})
        return roadmap

    async def get_by_id(self, roadmap_id: int) -> Roadmap:
        roadmap = await self.roadmaps.get_by_id(roadmap_id)
        if roadmap is None:
            raise EntityNotFoundError("roadmap")
        return roadmap

    async def get_all_by_project_id(self, project_id: int) -> Sequence[Roadmap]:
        project = await self._require_project(project_id)
        return await self.roadmaps.get_all_by_project(project)

    async def remove_by_id(self, roadmap_id: int) -> None:
        await self.roadmaps.delete_by_id(roadmap_id)
        logger.info(f"Roadmap {roadmap_id} removed", extra={"roadmap_id": roadmap_id})

    async def _require_project(self, project_id: int) -> Project:
        project = await self.projects.get_by_id(project_id)
        if project is None:
            raise EntityNotFoundError("project")
        return project
