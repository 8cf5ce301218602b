"""
Applications API - CRUD endpoints for application records.

Each handler receives a validated request model, makes one repository call
and maps failures to HTTP errors itself.
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel, Field, field_validator
import logging

from apptracker.api.validation import RecordId, require_choice, require_non_empty
from apptracker.db.connection import get_db_session
from apptracker.db.models import ApplicationStatus
from apptracker.domain.errors import RecordNotFoundError
from apptracker.repositories.application_repository import ApplicationRepository

logger = logging.getLogger(__name__)

router = APIRouter()

STATUS_VALUES = ApplicationStatus.values()


# ============================================
# Pydantic Models
# ============================================

class CreateApplicationRequest(BaseModel):
    """Request to create an application; every field is required"""
    # Defaults are validated so a missing key gets the same message as an empty one
    title: str = Field(None, validate_default=True)
    description: str = Field(None, validate_default=True)
    status: ApplicationStatus = Field(None, validate_default=True)

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, value):
        return require_non_empty(value, "Title is required")

    @field_validator("description", mode="before")
    @classmethod
    def description_required(cls, value):
        return require_non_empty(value, "Description is required")

    @field_validator("status", mode="before")
    @classmethod
    def status_in_choices(cls, value):
        return require_choice(
            value, STATUS_VALUES, "Status must be 'pending', 'approved', or 'rejected'"
        )


class UpdateApplicationRequest(BaseModel):
    """
    Partial update. Absent keys are left alone; a key sent as null is
    checked like any other value and rejected.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ApplicationStatus] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_empty(cls, value):
        return require_non_empty(value, "Title cannot be empty")

    @field_validator("description", mode="before")
    @classmethod
    def description_not_empty(cls, value):
        return require_non_empty(value, "Description cannot be empty")

    @field_validator("status", mode="before")
    @classmethod
    def status_in_choices(cls, value):
        return require_choice(value, STATUS_VALUES, "Invalid status")

    def changes(self) -> dict:
        """Only the fields the client actually sent"""
        return {name: getattr(self, name) for name in self.model_fields_set}


class ApplicationResponse(BaseModel):
    """Application record as returned by the API"""
    id: int
    title: str
    description: str
    status: ApplicationStatus


class MessageResponse(BaseModel):
    message: str


def _not_found(application_id: int) -> HTTPException:
    logger.warning(f"Application {application_id} not found")
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Application not found"
    )


# ============================================
# Endpoints
# ============================================

@router.get("/applications", response_model=list[ApplicationResponse])
async def list_applications(db: AsyncSession = Depends(get_db_session)):
    """Return every application record."""
    try:
        applications = await ApplicationRepository(db).list_all()
    except Exception:
        logger.error("Failed to list applications", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )
    return [application.to_dict() for application in applications]


@router.post(
    "/applications",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_application(
    payload: CreateApplicationRequest,
    db: AsyncSession = Depends(get_db_session)
):
    """Create an application; title, description and status are all required."""
    try:
        application = await ApplicationRepository(db).create(
            title=payload.title,
            description=payload.description,
            status=payload.status,
        )
    except Exception:
        logger.error("Failed to create application", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create application"
        )
    return application.to_dict()


@router.put("/applications/{id}", response_model=ApplicationResponse)
async def update_application(
    id: RecordId,
    payload: UpdateApplicationRequest,
    db: AsyncSession = Depends(get_db_session)
):
    """
    Update an application.

    Only the fields present in the body are changed. An empty object leaves
    the record as it is and returns it.
    """
    try:
        application = await ApplicationRepository(db).update(id, **payload.changes())
    except RecordNotFoundError:
        raise _not_found(id)
    except Exception:
        logger.error(f"Failed to update application {id}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not update application"
        )
    return application.to_dict()


@router.delete("/applications/{id}", response_model=MessageResponse)
async def delete_application(
    id: RecordId,
    db: AsyncSession = Depends(get_db_session)
):
    """Delete an application by ID."""
    try:
        await ApplicationRepository(db).delete(id)
    except RecordNotFoundError:
        raise _not_found(id)
    except Exception:
        logger.error(f"Failed to delete application {id}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not delete application"
        )
    return {"message": "Deleted successfully"}
