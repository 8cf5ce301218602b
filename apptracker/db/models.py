"""
SQLAlchemy ORM models for database tables.

Two independent tables: applications and users. Applications are not owned
by users.
"""
from sqlalchemy import Column, String, Text, Integer, Enum
from sqlalchemy.orm import declarative_base
import enum

Base = declarative_base()


# ============================================
# Enums
# ============================================

class ApplicationStatus(str, enum.Enum):
    """Review state of an application"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class Application(Base):
    """
    Applications table - the records managed by the CRUD API.
    """
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    # Stored as the lowercase value ("pending"), guarded by a CHECK constraint
    status = Column(
        Enum(
            ApplicationStatus,
            name="application_status",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )

    def to_dict(self) -> dict:
        """JSON-ready representation returned by the API"""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": ApplicationStatus(self.status).value,
        }


class User(Base):
    """
    Users table - registration and login.

    Password is stored only as a bcrypt hash.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)  # One account per email
    password = Column(String(255), nullable=False)  # bcrypt hash, never plaintext
