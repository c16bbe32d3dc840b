"""
Pydantic schemas for API request/response validation.
"""

from taskgate.schemas.user import (
    RegisterRequest,
    LoginRequest,
    ProfileUpdateRequest,
    UserResponse,
    AuthResponse,
    ProfileResponse,
    ProfileUpdateResponse,
)
from taskgate.schemas.task import (
    TaskWrite,
    TaskResponse,
)
from taskgate.schemas.common import (
    MessageResponse,
    ErrorResponse,
)

__all__ = [
    # User
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "UserResponse",
    "AuthResponse",
    "ProfileResponse",
    "ProfileUpdateResponse",
    # Task
    "TaskWrite",
    "TaskResponse",
    # Common
    "MessageResponse",
    "ErrorResponse",
]
