"""
Authentication endpoints.

Provides:
- Register (name/email/password -> user + token)
- Login (email/password -> user + token)
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from taskgate.auth.dependencies import get_token_service
from taskgate.auth.jwt import TokenService
from taskgate.auth.password import hash_password, needs_rehash, verify_password
from taskgate.core.database import get_db
from taskgate.core.errors import (
    AuthenticationError,
    ConflictError,
    ValidationError,
    handler_boundary,
)
from taskgate.models.user import DEFAULT_ROLE, User
from taskgate.schemas.user import AuthResponse, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter()


async def _email_taken(db: AsyncSession, email: str) -> bool:
    result = await db.execute(select(User.id).where(User.email == email))
    return result.first() is not None


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Create an account and return it with a fresh bearer token.

    The email is stored trimmed and lowercased; registering an address
    that already exists (in any case) is rejected.
    """
    if not register_data.name or not register_data.email or not register_data.password:
        raise ValidationError("Please provide all fields")

    with handler_boundary("register"):
        if await _email_taken(db, register_data.email):
            raise ConflictError("User already exists")

        user = User(
            name=register_data.name,
            email=register_data.email,
            password_hash=await run_in_threadpool(hash_password, register_data.password),
            role=DEFAULT_ROLE,
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            await db.rollback()
            raise ConflictError("User already exists")

    logger.info("Registered user %s", user.id)

    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        token=tokens.issue(user.id),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Authenticate with email and password.

    Unknown email and wrong password produce the same 401 response.
    """
    if not login_data.email or not login_data.password:
        raise ValidationError("Please provide email and password")

    with handler_boundary("login"):
        result = await db.execute(
            select(User).where(User.email == login_data.email)
        )
        user = result.scalar_one_or_none()

        if user is None or not await run_in_threadpool(
            verify_password, login_data.password, user.password_hash
        ):
            raise AuthenticationError("Invalid email or password")

        # Check if password needs rehash (security parameter upgrade)
        if needs_rehash(user.password_hash):
            user.password_hash = await run_in_threadpool(hash_password, login_data.password)
            await db.commit()

    logger.info("Login: user %s", user.id)

    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        token=tokens.issue(user.id),
    )
