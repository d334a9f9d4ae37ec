# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the shape of a user at the store boundary:
# - UserRegistration: Form input for POST /register
# - LoginForm: Form input for POST /login
# - UserCreate: Row written to the `users` table (password already hashed)
# - User: A stored user row, including the password hash
# - UserPublic: A user safe to hand to templates (no password hash)
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from lib.utils import normalize_email

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class UserRegistration(BaseModel):
    """
    Registration form.

    Only email and password are required; the profile fields are optional
    and blank fields arrive as None.
    """

    username: str | None = Field(
        default=None,
        max_length=80,
        description="Handle shown on posts"
    )

    name: str | None = Field(
        default=None,
        max_length=120,
        description="Display name"
    )

    email: str = Field(
        ...,
        min_length=3,
        max_length=254,
        pattern=r"^[^@\s]+@[^@\s]+$",
        description="Email address (unique, used to log in)"
    )

    age: int | None = Field(
        default=None,
        ge=0,
        le=150,
        description="Age in years"
    )

    password: str = Field(
        ...,
        min_length=1,
        description="Plaintext password (hashed before storage)"
    )

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return normalize_email(value) if isinstance(value, str) else value

    @field_validator("username", "name", "age", mode="before")
    @classmethod
    def _blank_is_none(cls, value):
        # Empty form inputs arrive as ""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class LoginForm(BaseModel):
    """Login form."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return normalize_email(value) if isinstance(value, str) else value


class UserCreate(BaseModel):
    """
    Row inserted into the `users` table on registration.

    `password` must already be a bcrypt hash.
    """

    username: str | None = None
    name: str | None = None
    email: str
    age: int | None = None
    password: str


class UserPublic(BaseModel):
    """A user without credentials."""

    id: UUID = Field(
        ...,
        description="Unique user identifier"
    )

    username: str | None = None
    name: str | None = None
    email: str
    age: int | None = None

    # Filename in the profile image bucket
    profile_image: str | None = Field(
        default=None,
        description="Stored profile picture filename"
    )

    # Ordered references to the user's posts
    posts: list[UUID] = Field(
        default_factory=list,
        description="IDs of the user's posts, oldest first"
    )

    created_at: datetime | None = None

    @field_validator("posts", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return value or []


class User(UserPublic):
    """A full `users` row, including the password hash."""

    password: str = Field(
        ...,
        repr=False,
        description="bcrypt hash of the password"
    )

    def to_public(self) -> UserPublic:
        """Drop the password hash."""
        return UserPublic.model_validate(self.model_dump(exclude={"password"}))

