"""Task board with optimistic updates.

The board keeps the last task list the server returned plus an overlay of
changes that have been sent but not yet confirmed. Readers always see the
overlay applied. When the server confirms a change its overlay entry is folded
into the authoritative list; when the request fails the entry is dropped and
the list is fetched again.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any

from tasktracker.client.api import ApiError, TaskTrackerClient
from tasktracker.client.views import filter_tasks, summarize, tasks_by_day
from tasktracker.schemas.enums import TaskStatus
from tasktracker.schemas.task import TaskCreate, TaskResponse, TaskStats, TaskUpdate

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "pending-"


class ChangeKind(StrEnum):
    """Kinds of unconfirmed change held in the overlay."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass
class PendingChange:
    """One unconfirmed change keyed by task id (a temporary id for creations)."""

    kind: ChangeKind
    task_id: str
    placeholder: TaskResponse | None = None
    fields: dict[str, Any] = field(default_factory=dict)


class TaskBoard:
    """Client-side task list for one signed-in user."""

    def __init__(self, client: TaskTrackerClient):
        self.client = client
        self.tasks: list[TaskResponse] = []
        self.notices: list[str] = []
        self._overlay: dict[str, PendingChange] = {}

    @property
    def has_pending(self) -> bool:
        return bool(self._overlay)

    def refresh(self) -> list[TaskResponse]:
        """Replace the authoritative list with the server's."""
        self.tasks = self.client.list_tasks()
        return self.tasks

    def visible_tasks(self) -> list[TaskResponse]:
        """The authoritative list with pending changes applied, newest first."""
        created = [
            change.placeholder
            for change in reversed(self._overlay.values())
            if change.kind == ChangeKind.CREATE
        ]
        visible = []
        for task in self.tasks:
            change = self._overlay.get(task.id)
            if change is None:
                visible.append(task)
            elif change.kind == ChangeKind.UPDATE:
                visible.append(task.model_copy(update=change.fields))
        return created + visible

    def view(self, search: str = "", status: TaskStatus | None = None) -> list[TaskResponse]:
        return filter_tasks(self.visible_tasks(), search=search, status=status)

    def calendar(self, year: int, month: int) -> dict[date, list[TaskResponse]]:
        return tasks_by_day(self.visible_tasks(), year, month)

    def stats(self) -> TaskStats:
        return summarize(self.visible_tasks())

    def add(self, task: TaskCreate) -> TaskResponse:
        """Show the new task immediately, then swap in the server's copy."""
        temp_id = f"{TEMP_ID_PREFIX}{uuid.uuid4()}"
        now = datetime.now(UTC)
        user = self.client.session.user
        placeholder = TaskResponse(
            id=temp_id,
            owner_id=user.id if user else "",
            title=task.title,
            description=task.description,
            status=task.status,
            due_date=task.due_date,
            created_at=now,
            updated_at=now,
        )
        self._overlay[temp_id] = PendingChange(ChangeKind.CREATE, temp_id, placeholder=placeholder)

        try:
            created = self.client.create_task(task)
        except ApiError as e:
            self._rollback(temp_id, "add task", e)
            raise

        del self._overlay[temp_id]
        self.tasks.insert(0, created)
        return created

    def update(self, task_id: str, changes: TaskUpdate) -> TaskResponse:
        """Apply field changes locally, then reconcile with the server's copy."""
        self._overlay[task_id] = PendingChange(
            ChangeKind.UPDATE, task_id, fields=changes.changes()
        )

        try:
            updated = self.client.update_task(task_id, changes)
        except ApiError as e:
            self._rollback(task_id, "update task", e)
            raise

        del self._overlay[task_id]
        self.tasks = [updated if t.id == task_id else t for t in self.tasks]
        return updated

    def set_status(self, task_id: str, status: TaskStatus) -> TaskResponse:
        return self.update(task_id, TaskUpdate(status=status))

    def remove(self, task_id: str) -> None:
        """Hide the task immediately, then delete it on the server."""
        self._overlay[task_id] = PendingChange(ChangeKind.DELETE, task_id)

        try:
            self.client.delete_task(task_id)
        except ApiError as e:
            self._rollback(task_id, "delete task", e)
            raise

        del self._overlay[task_id]
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def _rollback(self, key: str, action: str, error: ApiError) -> None:
        self._overlay.pop(key, None)
        self.notices.append(f"Failed to {action}. Please try again.")
        logger.warning(f"Rolled back optimistic {action} for {key}: {error}")

        if not self.client.session.is_authenticated:
            self.tasks = []
            return

        try:
            self.refresh()
        except ApiError as refresh_error:
            logger.warning(f"Could not re-fetch tasks after failed {action}: {refresh_error}")
