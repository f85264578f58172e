"""Pydantic schemas for API requests and responses."""

from tasktracker.schemas.auth import (
    AccountDeletedResponse,
    AuthResponse,
    ProfileUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
)
from tasktracker.schemas.task import (
    MessageResponse,
    TaskCreate,
    TaskResponse,
    TaskStats,
    TaskUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "ProfileUpdate",
    "UserResponse",
    "AuthResponse",
    "AccountDeletedResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskStats",
    "MessageResponse",
]
