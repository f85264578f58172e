"""User model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from tasktracker.database import Base
from tasktracker.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """User model for authentication and task ownership."""

    __tablename__ = "users"

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    profile_picture = Column(String(1024), nullable=False, default="")

    # Relationships
    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")
