"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tasktracker.config import get_settings
from tasktracker.exceptions import DuplicateEmailError, InvalidTokenError
from tasktracker.models.user import User
from tasktracker.schemas.auth import ProfileUpdate

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: str) -> str:
    """Create a JWT access token for the given user id."""
    issued_at = datetime.now(UTC)
    to_encode = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiration_days),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> str:
    """Decode and validate a JWT token, returning its subject.

    Raises InvalidTokenError for malformed, mis-signed, expired or subject-less tokens.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidTokenError() from e

    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError()
    return subject


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: str) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def _commit_user(db: Session, user: User) -> User:
    try:
        db.commit()
    except IntegrityError as e:
        # unique index on users.email lost a race with another writer
        db.rollback()
        raise DuplicateEmailError() from e
    db.refresh(user)
    return user


def create_user(db: Session, name: str, email: str, password: str) -> User:
    """Create a new user."""
    if get_user_by_email(db, email):
        raise DuplicateEmailError()

    user = User(name=name, email=email, password_hash=get_password_hash(password))
    db.add(user)
    user = _commit_user(db, user)
    logger.info(f"Registered user {user.id}")
    return user


def update_user(db: Session, user: User, changes: ProfileUpdate) -> User:
    """Apply a profile update. Omitted fields keep their stored value."""
    if changes.email is not None and changes.email != user.email:
        if get_user_by_email(db, changes.email):
            raise DuplicateEmailError("Email already in use")
        user.email = changes.email

    if changes.name is not None:
        user.name = changes.name

    if changes.password is not None:
        user.password_hash = get_password_hash(changes.password)

    return _commit_user(db, user)


def delete_user(db: Session, user: User) -> int:
    """Delete a user together with every task they own.

    Returns the number of tasks removed.
    """
    user_id = user.id
    deleted_tasks = len(user.tasks)
    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {user_id} and {deleted_tasks} task(s)")
    return deleted_tasks
