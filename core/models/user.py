# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the user identity records:
# - SignupRequest / LoginRequest: Inputs for the credential endpoints
# - UserRecord: A row of the users table (includes the password hash)
#
# UserRecord never leaves the service layer. Routes only ever see the
# minimal SessionUser (see session.py).
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


def normalize_email(value: str) -> str:
    """Emails are the login key; compare them trimmed and case-insensitively."""
    return value.strip().lower()


class SignupRequest(BaseModel):
    """
    Body of POST /signup.

    Example:
        {"name": "Ada", "email": "ada@example.com", "password": "s3cret"}
    """

    name: str = Field(..., min_length=1, description="Display name")
    email: str = Field(..., min_length=1, description="Email address (login key)")
    password: str = Field(..., min_length=1, description="Plaintext password")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        value = normalize_email(value)
        if not value:
            raise ValueError("email must not be blank")
        return value


class LoginRequest(BaseModel):
    """Body of POST /login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return normalize_email(value)


class UserRecord(BaseModel):
    """
    A stored user.

    Attributes:
        id: Server-generated identifier
        name: Display name
        email: Normalized email, unique across users
        password_hash: bcrypt hash of the password
        created_at: When the account was created
    """

    id: str
    name: str
    email: str
    password_hash: str = Field(..., repr=False)
    created_at: datetime | None = None
