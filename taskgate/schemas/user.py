"""
User and authentication schemas.

Request fields are optional at the schema level; handlers check presence
themselves so each endpoint can report its own message.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskgate.models.user import normalize_email


class _EmailNormalized(BaseModel):
    @field_validator("email", check_fields=False)
    @classmethod
    def normalize(cls, v: Optional[str]) -> Optional[str]:
        return normalize_email(v) if v is not None else None


class RegisterRequest(_EmailNormalized):
    """Self-registration."""

    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=1024)


class LoginRequest(_EmailNormalized):
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=1024)


class ProfileUpdateRequest(_EmailNormalized):
    """Partial profile update; only non-empty fields are written."""

    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=1024)


class UserResponse(BaseModel):
    """Public user fields. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class AuthResponse(UserResponse):
    token: str = Field(description="Bearer token")


class ProfileResponse(BaseModel):
    user: UserResponse


class ProfileUpdateResponse(BaseModel):
    user: UserResponse
    message: str = "User Updated Successfully."
