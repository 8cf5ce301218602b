"""Database package - all database-related code."""
from apptracker.db.connection import init_db, get_db_session, close_db
from apptracker.db.models import Base, Application, ApplicationStatus, User

__all__ = [
    "init_db",
    "get_db_session",
    "close_db",
    "Base",
    "Application",
    "ApplicationStatus",
    "User",
]
