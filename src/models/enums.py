"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Account roles."""

    USER = "user"
    ADMIN = "admin"

    def can_override_ownership(self) -> bool:
        """Check if this role may act on resources owned by other users."""
        return self == Role.ADMIN


class TaskStatus(str, Enum):
    """Workflow states of a task."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"
