"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from tasktracker.api.dependencies import get_current_user, get_task_service
from tasktracker.models.user import User
from tasktracker.schemas.enums import TaskStatus
from tasktracker.schemas.task import (
    MessageResponse,
    TaskCreate,
    TaskResponse,
    TaskStats,
    TaskUpdate,
)
from tasktracker.services.tasks import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
def get_tasks(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
    task_status: TaskStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=200),
):
    """Get all tasks owned by the current user."""
    return service.list_tasks(current_user.id, status=task_status, search=search)


@router.get("/calendar", response_model=list[TaskResponse])
def get_calendar(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
):
    """Get the current user's tasks due in the given month."""
    return service.tasks_due_in_month(current_user.id, year, month)


@router.get("/stats", response_model=TaskStats)
def get_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get dashboard counters for the current user."""
    return service.get_stats(current_user.id)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a new task for the current user."""
    return service.create_task(current_user.id, task_data)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Update a task."""
    return service.update_task(current_user.id, task_id, task_data)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Delete a task."""
    service.delete_task(current_user.id, task_id)
    return MessageResponse(message="Task removed")
