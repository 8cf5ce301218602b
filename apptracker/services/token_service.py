"""
Token Service - signs and verifies bearer tokens.

Tokens are HS256 JWTs carrying the user ID under the "userId" claim,
valid for JWT_EXPIRATION_HOURS (1 hour by default).
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging
import jwt

from apptracker.config import settings

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Raised when a token has a bad signature, is malformed or has expired"""
    pass


def create_access_token(user_id: int, now: Optional[datetime] = None) -> str:
    """
    Create a signed token for a user.

    Args:
        user_id: ID of the authenticated user
        now: Issue time (defaults to the current UTC time)

    Returns:
        Encoded JWT string
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.jwt_expiration_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """
    Verify a token and return its claims.

    Raises:
        InvalidTokenError: If the signature doesn't match or the token expired
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "userId"]},
        )
    except jwt.ExpiredSignatureError as e:
        logger.warning("Token rejected: expired")
        raise InvalidTokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        logger.warning(f"Token rejected: {e}")
        raise InvalidTokenError(str(e)) from e
