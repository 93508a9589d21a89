"""Core domain logic for the business tracker.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .exceptions import EntityInUseError, EntityNotFoundError
from .models import (
    Member,
    Milestone,
    Project,
    Roadmap,
    Task,
    User,
)

__all__ = [
    "EntityInUseError",
    "EntityNotFoundError",
    "Member",
    "Milestone",
    "Project",
    "Roadmap",
    "Task",
    "User",
]
