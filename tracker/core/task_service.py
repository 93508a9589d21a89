"""Task service: implements TaskPort.

Tasks live inside a milestone and are assigned to one responsible member.
Both references are checked before anything is saved and are never
reassigned afterwards.
"""

import logging
from collections.abc import Sequence

from .exceptions import EntityNotFoundError
from .models import Milestone, Task
from .ports import MemberStorePort, MilestoneStorePort, TaskPort, TaskStorePort

logger = logging.getLogger(__name__)


class TaskService(TaskPort):
    """Core implementation of TaskPort."""

    def __init__(
        self,
        tasks: TaskStorePort,
        milestones: MilestoneStorePort,
        members: MemberStorePort,
    ):
        """Initialize the task service.

        Args:
            tasks: TaskStorePort implementation for persistence.
            milestones: MilestoneStorePort implementation for milestone lookups.
            members: MemberStorePort implementation for member lookups.
        """
        self.tasks = tasks
        self.milestones = milestones
        self.members = members

    async def add(self, name: str, milestone_id: int, member_id: int) -> Task:
        """Create an active, unfinished task.

        Raises:
            EntityNotFoundError: If the milestone or the member doesn't exist.
            ValueError: If the name is blank.
        """
        milestone = await self._require_milestone(milestone_id)
        member = await self.members.get_by_id(member_id)
        if member is None:
            raise EntityNotFoundError("member")

        task = await self.tasks.save(
            Task(
                name=name,
                active=True,
                finished=False,
                milestone=milestone,
                responsible_member=member,
            )
        )

        logger.info(
            f"Task {task.id} created in milestone {milestone_id}",
            extra={
                "task_id": task.id,
                "milestone_id": milestone_id,
                "member_id": member_id,
            },
        )
        return task

    async def edit(
        self, task_id: int, name: str, active: bool, finished: bool
    ) -> Task:
        """Rename a task or change its progress flags.

        Raises:
            EntityNotFoundError: If the task doesn't exist.
            ValueError: If the name is blank.
        """
        task = await self.get_by_id(task_id)
        task.update_state(name, active, finished)
        task = await self.tasks.save(task)

        logger.info(
            f"Task {task_id} updated",
            extra={"task_id": task_id, "active": active, "finished": finished},
        )
        return task

    async def get_by_id(self, task_id: int) -> Task:
        """Retrieve a task.

        Raises:
            EntityNotFoundError: If the task doesn't exist.
        """
        task = await self.tasks.get_by_id(task_id)
        if task is None:
            raise EntityNotFoundError("task")
        return task

    async def get_all_by_milestone_id(self, milestone_id: int) -> Sequence[Task]:
        """List the tasks of a milestone.

        Raises:
            EntityNotFoundError: If the milestone doesn't exist.
        """
        milestone = await self._require_milestone(milestone_id)
        return await self.tasks.get_all_by_milestone(milestone)

    async def remove_by_id(self, task_id: int) -> None:
        """Delete a task."""
        await self.tasks.delete_by_id(task_id)
        logger.info(f"Task {task_id} removed", extra={"task_id": task_id})

    async def _require_milestone(self, milestone_id: int) -> Milestone:
        milestone = await self.milestones.get_by_id(milestone_id)
        if milestone is None:
            raise EntityNotFoundError("milestone")
        return milestone
