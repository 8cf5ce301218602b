"""
User Service - Handles user registration and credential checks.

bcrypt is CPU bound, so hashing and comparison run in the threadpool to keep
the event loop free for other requests.
"""
from typing import Optional
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from apptracker.config import settings
from apptracker.db.models import User
from apptracker.repositories.user_repository import UserRepository
from apptracker.utils.password_hash import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Service for registering and authenticating users"""

    @staticmethod
    async def register(
        db: AsyncSession,
        name: str,
        email: str,
        password: str
    ) -> User:
        """
        Create a new user with a hashed password.

        Args:
            db: Database session
            name: Display name
            email: Email address (must be unique)
            password: Plain text password (will be hashed)

        Returns:
            User model

        Raises:
            DuplicateRecordError: If the email is already registered
        """
        password_hash = await run_in_threadpool(
            hash_password, password, settings.bcrypt_rounds
        )
        return await UserRepository(db).create(
            name=name,
            email=email,
            password_hash=password_hash
        )

    @staticmethod
    async def validate_credentials(
        db: AsyncSession,
        email: str,
        password: str
    ) -> Optional[User]:
        """
        Validate email and password credentials.

        Returns:
            User object if credentials are valid, None otherwise. Unknown
            email and wrong password are indistinguishable to the caller.
        """
        user = await UserRepository(db).get_by_email(email)

        if not user:
            logger.warning("Login attempt failed: unknown email")
            return None

        if not await run_in_threadpool(verify_password, password, user.password):
            logger.warning(f"Login attempt failed: invalid password for user {user.id}")
            return None

        logger.info(f"User authenticated successfully: {user.id}")
        return user
