"""
Authentication module.

Provides:
- JWT bearer token issuance and verification
- Password hashing (Argon2id)
- The ``get_current_user`` dependency guarding protected routes
"""

from taskgate.auth.jwt import (
    InvalidTokenError,
    TokenPayload,
    TokenService,
)
from taskgate.auth.dependencies import (
    CurrentUser,
    get_current_user,
    get_token_service,
)
from taskgate.auth.password import (
    hash_password,
    verify_password,
)

__all__ = [
    # JWT
    "InvalidTokenError",
    "TokenPayload",
    "TokenService",
    # Dependencies
    "CurrentUser",
    "get_current_user",
    "get_token_service",
    # Password
    "hash_password",
    "verify_password",
]
