"""
FastAPI dependencies for authentication.

Provides:
- get_token_service: the process-wide TokenService from app state
- get_current_user: Verify the bearer token and load the caller
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskgate.auth.jwt import InvalidTokenError, TokenService
from taskgate.core.database import get_db
from taskgate.core.errors import AuthenticationError, handler_boundary
from taskgate.models.user import User
from taskgate.schemas.user import UserResponse

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer(auto_error=False)

CurrentUser = UserResponse


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """
    Extract and validate the current user from the Authorization header.

    The loaded user (id, name, email) is also stored on ``request.state.user``.

    Raises:
        AuthenticationError: If the token is missing or invalid, or the
            user no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")

    try:
        user_id = tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.debug("Rejected bearer token: %s", e)
        raise AuthenticationError("Not authorized, token failed")

    with handler_boundary("authenticate"):
        result = await db.execute(
            select(User.id, User.name, User.email).where(User.id == user_id)
        )
        row = result.first()

    if row is None:
        raise AuthenticationError("Not authorized, user not found")

    user = CurrentUser(id=row.id, name=row.name, email=row.email)
    request.state.user = user
    return user
