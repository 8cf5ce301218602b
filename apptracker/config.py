"""Configuration management using environment variables"""
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Fallback secret shipped by the first version of this service. Anyone can
# forge tokens with it, so it is rejected like a missing secret.
LEGACY_DEFAULT_SECRET = "defaultSecretKey"


class Settings:
    """Application settings - only what the service needs right now"""

    def __init__(self):
        # Environment
        self.environment = os.getenv("ENVIRONMENT", "development")

        # Token signing - mandatory in every environment
        self.jwt_secret = self._get_required("JWT_SECRET")
        if self.jwt_secret == LEGACY_DEFAULT_SECRET:
            raise ValueError(
                f"Cannot use the well-known secret '{LEGACY_DEFAULT_SECRET}'. "
                "Set a real JWT_SECRET."
            )
        self.jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
        self.jwt_expiration_hours = int(os.getenv("JWT_EXPIRATION_HOURS", "1"))

        # Password hashing work factor
        self.bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", "10"))

        # Server configuration
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", "3000"))

        # Database configuration
        self.database_url = os.getenv(
            "DATABASE_URL",
            "sqlite+aiosqlite:///./applications.db"
        )

        # CORS origins (comma-separated list, "*" allows any origin)
        self.cors_origins = os.getenv("CORS_ORIGINS", "*")

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def allowed_origins(self) -> list[str]:
        """CORS origins as a list, blanks dropped."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def _get_required(self, key: str) -> str:
        """Get required environment variable or raise error."""
        value = os.getenv(key, "").strip()
        if not value:
            raise ValueError(
                f"Missing required environment variable: {key}. "
                "The service refuses to start without it."
            )
        return value


# Global settings instance
settings = Settings()
