"""Enums for model fields."""

from enum import Enum


class TaskStatus(str, Enum):
    """Lifecycle states of a task."""

    PENDING = "pending"
    COMPLETED = "completed"

    def toggled(self) -> "TaskStatus":
        """Return the opposite status."""
        if self == TaskStatus.PENDING:
            return TaskStatus.COMPLETED
        return TaskStatus.PENDING
