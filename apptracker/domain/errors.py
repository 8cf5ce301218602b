"""
Domain exceptions.

Repositories translate raw database failures into these so handlers can map
each one to its own HTTP status.
"""


class DomainError(Exception):
    """Base exception for domain layer errors"""
    pass


class RecordNotFoundError(DomainError):
    """Raised when a record with the given key doesn't exist"""

    def __init__(self, entity: str, key):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key} not found")


class DuplicateRecordError(DomainError):
    """Raised when a write violates a uniqueness constraint"""

    def __init__(self, entity: str, field: str, value):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity} with {field} '{value}' already exists")
