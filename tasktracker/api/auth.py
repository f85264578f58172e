"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tasktracker.api.dependencies import get_current_user
from tasktracker.database import get_db
from tasktracker.models.user import User
from tasktracker.schemas.auth import (
    AccountDeletedResponse,
    AuthResponse,
    ProfileUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
)
from tasktracker.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    delete_user,
    update_user,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def build_auth_response(user: User) -> AuthResponse:
    """User summary plus a freshly issued token."""
    summary = UserResponse.model_validate(user)
    return AuthResponse(**summary.model_dump(), token=create_access_token(user.id))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    user = create_user(db, user_data.name, user_data.email, user_data.password)
    return build_auth_response(user)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        logger.info("Rejected login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return build_auth_response(user)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    changes: ProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update name, email or password of the current user."""
    return update_user(db, current_user, changes)


@router.delete("/profile", response_model=AccountDeletedResponse)
def delete_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete the current user and all of their tasks."""
    deleted_tasks = delete_user(db, current_user)
    return AccountDeletedResponse(message="User and all tasks deleted", deleted_tasks=deleted_tasks)
