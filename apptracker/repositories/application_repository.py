"""
Application repository for data access.

Thin persistence gateway over the applications table. Every write commits
immediately; a missing row is reported as RecordNotFoundError.
"""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from apptracker.db.models import Application, ApplicationStatus
from apptracker.domain.errors import RecordNotFoundError

logger = logging.getLogger(__name__)

# Columns a client may change through the update endpoint
UPDATABLE_FIELDS = ("title", "description", "status")


class ApplicationRepository:
    """Repository for Application entity"""

    def __init__(self, session: AsyncSession):
        self._db = session

    async def list_all(self) -> List[Application]:
        """Get every application, oldest first"""
        result = await self._db.execute(
            select(Application).order_by(Application.id)
        )
        return list(result.scalars().all())

    async def get_by_id(self, application_id: int) -> Optional[Application]:
        """Get application by ID"""
        return await self._db.get(Application, application_id)

    async def create(self, title: str, description: str, status: str) -> Application:
        """Insert a new application and return it with its generated ID"""
        application = Application(
            title=title,
            description=description,
            status=ApplicationStatus(status),
        )
        self._db.add(application)
        await self._db.commit()
        await self._db.refresh(application)

        logger.info(f"Created application {application.id} ({application.status.value})")
        return application

    async def update(self, application_id: int, **fields) -> Application:
        """
        Update only the supplied fields of an application.

        Args:
            application_id: Application ID
            **fields: Subset of title, description, status

        Returns:
            The updated application

        Raises:
            RecordNotFoundError: If no application has this ID
        """
        application = await self.get_by_id(application_id)
        if application is None:
            raise RecordNotFoundError("Application", application_id)

        for name, value in fields.items():
            if name not in UPDATABLE_FIELDS:
                raise ValueError(f"Field '{name}' cannot be updated")
            if name == "status":
                value = ApplicationStatus(value)
            setattr(application, name, value)

        await self._db.commit()
        await self._db.refresh(application)

        logger.info(f"Updated application {application_id}: {sorted(fields)}")
        return application

    async def delete(self, application_id: int) -> None:
        """
        Delete an application by ID.

        Raises:
            RecordNotFoundError: If no application has this ID
        """
        application = await self.get_by_id(application_id)
        if application is None:
            raise RecordNotFoundError("Application", application_id)

        await self._db.delete(application)
        await self._db.commit()

        logger.info(f"Deleted application {application_id}")
