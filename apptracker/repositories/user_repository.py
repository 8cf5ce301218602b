"""
User repository for data access.

Email uniqueness is left to the database constraint so concurrent
registrations resolve atomically: the first commit wins, the second raises
DuplicateRecordError.
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from apptracker.db.models import User
from apptracker.domain.errors import DuplicateRecordError

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User entity"""

    def __init__(self, session: AsyncSession):
        self._db = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        result = await self._db.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def create(self, name: str, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Args:
            name: Display name
            email: Unique email address
            password_hash: bcrypt hash of the password

        Returns:
            The created user with its generated ID

        Raises:
            DuplicateRecordError: If the email is already registered
        """
        user = User(name=name, email=email, password=password_hash)
        self._db.add(user)
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(f"Registration rejected, email already taken: {email}")
            raise DuplicateRecordError("User", "email", email) from e

        await self._db.refresh(user)
        logger.info(f"Created user {user.id}")
        return user
