"""Domain layer - exceptions shared by repositories and API handlers."""
from apptracker.domain.errors import DomainError, RecordNotFoundError, DuplicateRecordError

__all__ = ["DomainError", "RecordNotFoundError", "DuplicateRecordError"]
