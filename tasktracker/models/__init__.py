"""SQLAlchemy models."""

from tasktracker.models.task import Task
from tasktracker.models.user import User
from tasktracker.schemas.enums import TaskStatus

__all__ = [
    "User",
    "Task",
    "TaskStatus",
]
