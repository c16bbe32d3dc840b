"""
Common schemas used across the API.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Generic confirmation."""

    message: str = Field(description="Human-readable result")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    detail: str = Field(description="Error message")
    request_id: Optional[str] = Field(default=None, description="Set for unexpected errors")
