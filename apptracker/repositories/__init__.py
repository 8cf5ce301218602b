"""Repositories - the persistence gateway over the async ORM session."""
from apptracker.repositories.application_repository import ApplicationRepository
from apptracker.repositories.user_repository import UserRepository

__all__ = ["ApplicationRepository", "UserRepository"]
