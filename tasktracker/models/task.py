"""Task model."""

from sqlalchemy import Column, Date, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from tasktracker.database import Base
from tasktracker.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin
from tasktracker.schemas.enums import TaskStatus


class Task(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A single task owned by exactly one user."""

    __tablename__ = "tasks"

    owner_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value, index=True)
    due_date = Column(Date, nullable=True, index=True)

    # Relationships
    owner = relationship("User", back_populates="tasks")
