"""Task schemas."""

import math
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from tasktracker.schemas.enums import TaskStatus


def parse_due_date(value: Any) -> Any:
    """Normalize a due date input.

    Empty strings mean "no due date"; ISO datetimes are cut to their date part.
    """
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if "T" in value:
            return value.split("T", 1)[0]
    return value


DueDate = Annotated[date | None, BeforeValidator(parse_due_date)]

DUE_DATE_ALIASES = AliasChoices("due_date", "dueDate")


class TaskCreate(BaseModel):
    """Create a new task. Owner always comes from the authenticated caller."""

    title: str = Field(..., max_length=500)
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus = TaskStatus.PENDING
    due_date: DueDate = Field(None, validation_alias=DUE_DATE_ALIASES)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value


class TaskUpdate(BaseModel):
    """Partial task update. Only fields present in the request are applied."""

    title: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus | None = None
    due_date: DueDate = Field(None, validation_alias=DUE_DATE_ALIASES)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("Title cannot be empty")
        return value

    def changes(self) -> dict[str, Any]:
        """Fields explicitly supplied by the caller."""
        return self.model_dump(exclude_unset=True)


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    title: str
    description: str | None
    status: TaskStatus
    due_date: date | None
    created_at: datetime
    updated_at: datetime


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed tasks, rounded half up; 0 for an empty list."""
    if not total:
        return 0
    return math.floor(completed * 100 / total + 0.5)


class TaskStats(BaseModel):
    """Dashboard counters for the caller's tasks."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    completion_rate: int = 0


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
