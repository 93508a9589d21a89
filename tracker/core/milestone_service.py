"""Milestone service: implements MilestonePort."""

import logging
from collections.abc import Sequence
from datetime import date

from .exceptions import EntityNotFoundError
from .models import Milestone, Roadmap
from .ports import MilestonePort, MilestoneStorePort, RoadmapStorePort

logger = logging.getLogger(__name__)


class MilestoneService(MilestonePort):
    """Core implementation of MilestonePort."""

    def __init__(self, milestones: MilestoneStorePort, roadmaps: RoadmapStorePort):
        self.milestones = milestones
        self.roadmaps = roadmaps

    async def add(
        self, name: str, start_date: date, finish_date: date, roadmap_id: int
    ) -> Milestone:
        """Create a milestone on an existing roadmap.

        Raises:
            EntityNotFoundError: If the roadmap doesn't exist.
            ValueError: If finish_date is before start_date.
        """
        roadmap = await self._require_roadmap(roadmap_id)
        milestone = await self.milestones.save(
            Milestone(
                name=name,
                start_date=start_date,
                finish_date=finish_date,
                roadmap=roadmap,
            )
        )

        logger.info(
            f"Milestone {milestone.id} created on roadmap {roadmap_id}",
            extra={"milestone_id": milestone.id, "roadmap_id": roadmap_id},
        )
        return milestone

    async def edit(
        self, milestone_id: int, name: str, start_date: date, finish_date: date
    ) -> Milestone:
        """Rename or reschedule a milestone.

        Raises:
            EntityNotFoundError: If the milestone doesn't exist.
            ValueError: If finish_date is before start_date.
        """
        milestone = await self.get_by_id(milestone_id)
        milestone.reschedule(start_date, finish_date)
        milestone.name = name
        milestone = await self.milestones.save(milestone)

        logger.info(
            f"Milestone {milestone_id} updated", extra={"milestone_id": milestone_id}
        )
        return milestone

    async def get_by_id(self, milestone_id: int) -> Milestone:
        milestone = await self.milestones.get_by_id(milestone_id)
        if milestone is None:
            raise EntityNotFoundError("milestone")
        return milestone

    async def get_all_by_roadmap_id(self, roadmap_id: int) -> Sequence[Milestone]:
        roadmap = await self._require_roadmap(roadmap_id)
        return await self.milestones.get_all_by_roadmap(roadmap)

    async def remove_by_id(self, milestone_id: int) -> None:
        await self.milestones.delete_by_id(milestone_id)
        logger.info(
            f"Milestone {milestone_id} removed", extra={"milestone_id": milestone_id}
        )

    async def _require_roadmap(self, roadmap_id: int) -> Roadmap:
        roadmap = await self.roadmaps.get_by_id(roadmap_id)
        if roadmap is None:
            raise EntityNotFoundError("roadmap")
        return roadmap
