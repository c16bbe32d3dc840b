"""
Taskgate Database Models

This module exports all SQLAlchemy models for the application.
"""

from taskgate.models.user import User, DEFAULT_ROLE, normalize_email
from taskgate.models.task import Task

__all__ = [
    "User",
    "DEFAULT_ROLE",
    "normalize_email",
    "Task",
]
