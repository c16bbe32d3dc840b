"""
Task schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskWrite(BaseModel):
    """Body for creating or replacing a task."""

    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    user_id: int
