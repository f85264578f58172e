"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tasktracker.database import get_db
from tasktracker.exceptions import InvalidTokenError, UnauthenticatedError
from tasktracker.models.user import User
from tasktracker.services.auth import get_user_by_id, verify_access_token
from tasktracker.services.tasks import TaskService

# auto_error is off so a missing header maps to our own 401 body
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    if credentials is None:
        raise UnauthenticatedError("Not authorized, no token")

    try:
        user_id = verify_access_token(credentials.credentials)
    except InvalidTokenError as e:
        raise UnauthenticatedError("Not authorized, token failed") from e

    user = get_user_by_id(db, user_id)
    if user is None:
        raise UnauthenticatedError("User not found")

    return user


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get task service with dependencies."""
    return TaskService(db)
