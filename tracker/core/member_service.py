"""Member service: implements MemberPort for project memberships.

This is a core service that attaches users to projects, changes their
positions, lists the members of a project and removes memberships. Every
operation that needs an existing project, user or member checks the
corresponding store first, so a failed lookup never leaves a partial write.
"""

import logging
from collections.abc import Sequence

from .exceptions import EntityNotFoundError
from .models import Member, Project, User
from .ports import MemberPort, MemberStorePort, ProjectStorePort, UserStorePort

logger = logging.getLogger(__name__)


class MemberService(MemberPort):
    """Core implementation of MemberPort.

    Stateless between calls; all state lives in the injected stores.
    """

    def __init__(
        self,
        members: MemberStorePort,
        projects: ProjectStorePort,
        users: UserStorePort,
    ):
        """Initialize the member service.

        Args:
            members: MemberStorePort implementation for persistence.
            projects: ProjectStorePort implementation for project lookups.
            users: UserStorePort implementation for user lookups.
        """
        self.members = members
        self.projects = projects
        self.users = users

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
        """
        project = await self._require_project(project_id)
        user = await self._require_user(user_id)

        member = await self.members.save(Member.join(project, user, position))

        logger.info(
            f"Member {member.id} added to project {project_id}",
            extra={
                "member_id": member.id,
                "project_id": project_id,
                "user_id": user_id,
                "position": position,
            },
        )

        return member

    async def edit(self, member_id: int, position: str) -> Member:
        """Change a member's position.

        Raises:
            EntityNotFoundError: If the member doesn't exist.
        """
        member = await self.get_by_id(member_id)
        member.change_position(position)
        member = await self.members.save(member)

        logger.info(
            f"Member {member_id} moved to position {position!r}",
            extra={"member_id": member_id, "position": position},
        )

        return member

    async def get_by_id(self, member_id: int) -> Member:
        """Retrieve a member.

        Raises:
            EntityNotFoundError: If the member doesn't exist.
        """
        member = await self.members.get_by_id(member_id)
        if member is None:
            raise EntityNotFoundError("member")
        return member

    async def get_all_by_project_id(self, project_id: int) -> Sequence[Member]:
        """List the members of a project in store order.

        Raises:
            EntityNotFoundError: If the project doesn't exist.
        """
        project = await self._require_project(project_id)
        members = await self.members.get_all_by_project(project)

        logger.debug(
            f"Listed members of project {project_id}",
            extra={"project_id": project_id, "count": len(members)},
        )

        return members

    async def remove_by_id(self, member_id: int) -> None:
        """Delete a member. Unknown IDs are not an error."""
        await self.members.delete_by_id(member_id)

        logger.info(f"Member {member_id} removed", extra={"member_id": member_id})

    async def _require_project(self, project_id: int) -> Project:
        project = await self.projects.get_by_id(project_id)
        if project is None:
            raise EntityNotFoundError("project")
        return project

    async def _require_user(self, user_id: int) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("user")
        return user
