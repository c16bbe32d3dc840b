"""
JWT bearer tokens.

Each token carries the user id as ``sub`` plus expiry, issuer and audience
claims, and is signed with the process-wide secret. There is no revocation:
a token stays valid until it expires.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, field_validator

from taskgate.core.config import Settings


class InvalidTokenError(Exception):
    """Token is malformed, expired, or signed with another key."""


class TokenPayload(BaseModel):
    """JWT token payload structure."""
    sub: str                          # User ID (subject)
    iat: datetime                     # Issued at
    exp: datetime                     # Expiration
    iss: str                          # Issuer
    aud: str                          # Audience
    jti: Optional[str] = None         # JWT ID

    @field_validator("sub")
    @classmethod
    def subject_is_user_id(cls, v: str) -> str:
        if not v.isdigit():
            raise ValueError("Token subject is not a user id")
        return v

    @property
    def user_id(self) -> int:
        return int(self.sub)


class TokenService:
    """Issue and verify bearer tokens with a fixed secret."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(days=30),
        issuer: str = "taskgate-api",
        audience: str = "taskgate-client",
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expires_delta=settings.access_token_expires,
            issuer=settings.token_issuer,
            audience=settings.token_audience,
        )

    def issue(self, user_id: int) -> str:
        """
        Create a signed token for ``user_id``.

        Args:
            user_id: The user's database ID

        Returns:
            Encoded JWT string
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self.expires_delta,
            "iss": self.issuer,
            "aud": self.audience,
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenPayload:
        """
        Verify and decode a token.

        Raises:
            InvalidTokenError: If the token is invalid, expired, or its
                subject is not a user id
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
        except ExpiredSignatureError as exc:
            raise InvalidTokenError("Token has expired") from exc
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc

        try:
            claims = TokenPayload(
                sub=payload["sub"],
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                iss=payload["iss"],
                aud=payload["aud"],
                jti=payload.get("jti"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError("Malformed token claims") from exc
        return claims

    def verify(self, token: str) -> int:
        """Return the user id carried by a valid token."""
        return self.decode(token).user_id
