"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.networks import validate_email


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class UserRegister(BaseModel):
    """User registration request."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class UserLogin(BaseModel):
    """User login request.

    Any non-empty strings are accepted so that bad credentials of every shape
    get the same 401 answer.
    """

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        """Normalize the way registration does; malformed addresses pass through."""
        try:
            return validate_email(value)[1]
        except ValueError:
            return value


class ProfileUpdate(BaseModel):
    """Profile update request.

    Blank strings are treated the same as omitted fields and keep the stored value.
    """

    name: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=6, max_length=72)

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    profile_picture: str = ""


class AuthResponse(UserResponse):
    """Authentication response: user summary plus a bearer token."""

    token: str
    token_type: str = "bearer"  # noqa: S105


class AccountDeletedResponse(BaseModel):
    """Confirmation returned after an account is removed."""

    message: str
    deleted_tasks: int
