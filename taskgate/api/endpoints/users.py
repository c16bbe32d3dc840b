"""
Profile endpoints for the authenticated user.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from taskgate.auth.dependencies import CurrentUser, get_current_user
from taskgate.auth.password import hash_password
from taskgate.core.database import get_db
from taskgate.core.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    handler_boundary,
)
from taskgate.core.query import UpdateBuilder
from taskgate.models.user import User
from taskgate.schemas.user import (
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(current_user: CurrentUser = Depends(get_current_user)):
    """Get current user's profile information."""
    return ProfileResponse(user=current_user)


@router.patch("/update", response_model=ProfileUpdateResponse)
@router.put("/update", response_model=ProfileUpdateResponse)
async def update_profile(
    update_data: ProfileUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update any of name, email and password.

    Only non-empty fields are written. Email uniqueness is left to the
    store's unique constraint.
    """
    if not (update_data.name or update_data.email or update_data.password):
        raise ValidationError("Please provide at least one valid field to update")

    with handler_boundary("update profile"):
        builder = UpdateBuilder(User.__tablename__)
        if update_data.name:
            builder.set("name", update_data.name)
        if update_data.email:
            builder.set("email", update_data.email)
        if update_data.password:
            builder.set(
                "password_hash",
                await run_in_threadpool(hash_password, update_data.password),
            )
        builder.where("id", current_user.id).returning("id", "name", "email")

        statement, params = builder.statement()
        try:
            result = await db.execute(statement, params)
            row = result.first()
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise ConflictError("Email already in use")

    if row is None:
        raise NotFoundError("User not found")

    logger.info("Updated profile of user %s (%s)", row.id, ", ".join(builder.columns))

    return ProfileUpdateResponse(
        user=UserResponse(id=row.id, name=row.name, email=row.email),
    )
