"""Enums shared by the API schemas, the models and the client."""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Workflow states a task can be in."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    @property
    def is_done(self) -> bool:
        """Check if this status closes the task."""
        return self == TaskStatus.COMPLETED
