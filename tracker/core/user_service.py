"""User service: implements UserPort."""

import logging
from collections.abc import Sequence

from .exceptions import EntityNotFoundError
from .models import User
from .ports import UserPort, UserStorePort

logger = logging.getLogger(__name__)


class UserService(UserPort):
    """Core implementation of UserPort."""

    def __init__(self, users: UserStorePort):
        self.users = users

    async def add(
        self, first_name: str, last_name: str, position: str, avatar: str
    ) -> User:
        user = await self.users.save(
            User(
                first_name=first_name,
                last_name=last_name,
                position=position,
                avatar=avatar,
            )
        )
        logger.info(f"User {user.id} added", extra={"user_id": user.id})
        return user

    async def edit(
        self,
        user_id: int,
        first_name: str,
        last_name: str,
        position: str,
        avatar: str,
    ) -> User:
        user = await self.get_by_id(user_id)
        user.update_profile(first_name, last_name, position, avatar)
        user = await self.users.save(user)
        logger.info(f"User {user_id} updated", extra={"user_id": user_id})
        return user

    async def get_by_id(self, user_id: int) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("user")
        return user

    async def get_all(self) -> Sequence[User]:
        return await self.users.get_all()

    async def remove_by_id(self, user_id: int) -> None:
        await self.users.delete_by_id(user_id)
        logger.info(f"User {user_id} removed", extra={"user_id": user_id})
