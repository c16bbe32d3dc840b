"""
API Router configuration.

Aggregates all endpoints with proper tagging and prefixes.
"""

from fastapi import APIRouter

from taskgate.api.endpoints import (
    auth,
    tasks,
    users,
)
from taskgate.schemas.common import ErrorResponse

api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
)

# Authentication (no auth required)
api_router.include_router(
    auth.router,
    tags=["authentication"]
)

# Profile of the authenticated user
api_router.include_router(
    users.router,
    tags=["users"],
    responses={401: {"model": ErrorResponse}},
)

# Tasks owned by the authenticated user
api_router.include_router(
    tasks.router,
    prefix="/tasks",
    tags=["tasks"],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
