"""Task service: ownership-checked CRUD over the tasks table."""

import calendar
import logging
from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session

from tasktracker.exceptions import ForbiddenError, NotFoundError, ValidationError
from tasktracker.models.task import Task
from tasktracker.schemas.enums import TaskStatus
from tasktracker.schemas.task import TaskCreate, TaskStats, TaskUpdate, completion_rate

logger = logging.getLogger(__name__)

# Fields a caller may change after creation; the owner never changes
UPDATABLE_FIELDS = ("title", "description", "status", "due_date")
REQUIRED_FIELDS = ("title", "status")


class TaskService:
    """Service for task operations scoped to a single requesting user."""

    def __init__(self, db: Session):
        self.db = db

    def _owned_query(self, owner_id: str):
        return self.db.query(Task).filter(Task.owner_id == owner_id)

    def get_owned_task(self, owner_id: str, task_id: str) -> Task:
        """Load a task and check the requester owns it.

        Raises NotFoundError if the id is unknown and ForbiddenError if it
        belongs to somebody else.
        """
        task = self.db.query(Task).filter(Task.id == task_id).first()
        if task is None:
            raise NotFoundError("Task not found")
        if task.owner_id != owner_id:
            logger.warning(f"User {owner_id} denied access to task {task_id}")
            raise ForbiddenError()
        return task

    def list_tasks(
        self,
        owner_id: str,
        status: TaskStatus | None = None,
        search: str | None = None,
    ) -> list[Task]:
        """List the requester's tasks, newest first."""
        query = self._owned_query(owner_id)

        if status is not None:
            query = query.filter(Task.status == status.value)

        if search and search.strip():
            pattern = f"%{search.strip().lower()}%"
            query = query.filter(func.lower(Task.title).like(pattern))

        return query.order_by(Task.created_at.desc(), Task.id).all()

    def create_task(self, owner_id: str, data: TaskCreate) -> Task:
        """Create a task owned by the requester."""
        task = Task(
            owner_id=owner_id,
            title=data.title,
            description=data.description,
            status=data.status.value,
            due_date=data.due_date,
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def update_task(self, owner_id: str, task_id: str, data: TaskUpdate) -> Task:
        """Apply a partial update to one of the requester's tasks."""
        task = self.get_owned_task(owner_id, task_id)

        changes = {k: v for k, v in data.changes().items() if k in UPDATABLE_FIELDS}
        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field.capitalize()} cannot be empty")

        for key, value in changes.items():
            if isinstance(value, TaskStatus):
                value = value.value
            setattr(task, key, value)

        self.db.commit()
        self.db.refresh(task)
        return task

    def delete_task(self, owner_id: str, task_id: str) -> None:
        """Delete one of the requester's tasks."""
        task = self.get_owned_task(owner_id, task_id)
        self.db.delete(task)
        self.db.commit()

    def tasks_due_in_month(self, owner_id: str, year: int, month: int) -> list[Task]:
        """Tasks with a due date inside the given month, earliest first.

        Tasks without a due date never appear here.
        """
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")
        if not date.min.year <= year <= date.max.year:
            raise ValidationError("Year is out of range")

        first = date(year, month, 1)
        last = date(year, month, calendar.monthrange(year, month)[1])
        return (
            self._owned_query(owner_id)
            .filter(Task.due_date.is_not(None), Task.due_date >= first, Task.due_date <= last)
            .order_by(Task.due_date, Task.created_at)
            .all()
        )

    def get_stats(self, owner_id: str) -> TaskStats:
        """Count the requester's tasks per status."""
        counts = dict(
            self.db.query(Task.status, func.count(Task.id))
            .filter(Task.owner_id == owner_id)
            .group_by(Task.status)
            .all()
        )
        total = sum(counts.values())
        completed = counts.get(TaskStatus.COMPLETED.value, 0)
        return TaskStats(
            total=total,
            pending=counts.get(TaskStatus.PENDING.value, 0),
            in_progress=counts.get(TaskStatus.IN_PROGRESS.value, 0),
            completed=completed,
            completion_rate=completion_rate(completed, total),
        )
