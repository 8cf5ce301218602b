"""
Authentication API - user registration, login and bearer token checks.

authenticate_token is a FastAPI dependency. No route depends on it yet;
which routes require a logged-in user is still an open product decision.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel, Field, field_validator
import logging

from apptracker.api.validation import require_email, require_min_length, require_non_empty
from apptracker.db.connection import get_db_session
from apptracker.domain.errors import DuplicateRecordError
from apptracker.services.token_service import InvalidTokenError, create_access_token, decode_access_token
from apptracker.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

PASSWORD_MIN_LENGTH = 6


# ============================================
# Pydantic Models
# ============================================

class RegisterRequest(BaseModel):
    """Registration payload; every field is required"""
    name: str = Field(None, validate_default=True)
    email: str = Field(None, validate_default=True)
    password: str = Field(None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def name_required(cls, value):
        return require_non_empty(value, "Name is required")

    @field_validator("email", mode="before")
    @classmethod
    def email_valid(cls, value):
        return require_email(value, "Valid email required")

    @field_validator("password", mode="before")
    @classmethod
    def password_long_enough(cls, value):
        return require_min_length(
            value,
            PASSWORD_MIN_LENGTH,
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        )


class LoginRequest(BaseModel):
    """Login payload - the password is only checked for presence"""
    email: str = Field(None, validate_default=True)
    password: str = Field(None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def email_valid(cls, value):
        return require_email(value, "Valid email required")

    @field_validator("password", mode="before")
    @classmethod
    def password_required(cls, value):
        return require_non_empty(value, "Password required")


class RegisterResponse(BaseModel):
    message: str
    userId: int


class LoginResponse(BaseModel):
    message: str
    token: str


# ============================================
# Endpoints
# ============================================

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session)
):
    """Register a new user. The password is stored as a bcrypt hash."""
    try:
        user = await UserService.register(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password
        )
    except DuplicateRecordError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists"
        )
    except Exception:
        logger.error("Failed to register user", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not register user"
        )

    return {"message": "User registered successfully", "userId": user.id}


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session)
):
    """
    Exchange email and password for a bearer token valid for one hour.

    Unknown email and wrong password get the same 400 response.
    """
    try:
        user = await UserService.validate_credentials(db, payload.email, payload.password)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid credentials"
            )
        token = create_access_token(user.id)
    except HTTPException:
        raise
    except Exception:
        logger.error("Login failed", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed"
        )

    return {"message": "Login successful", "token": token}


# ============================================
# FastAPI Dependencies
# ============================================

async def authenticate_token(
    request: Request,
    authorization: Optional[str] = Header(None)
) -> dict:
    """
    Verify the bearer token from the Authorization header.

    Args:
        request: Current request; decoded claims are stored on request.state.user
        authorization: Authorization header ("Bearer <token>")

    Returns:
        Decoded token claims, e.g. {"userId": 1, "iat": ..., "exp": ...}

    Raises:
        HTTPException: 401 if no token is presented, 403 if it is invalid or expired
    """
    parts = authorization.split(" ") if authorization else []
    token = parts[1].strip() if len(parts) > 1 else ""

    if not token:
        logger.warning("Request rejected: missing bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied",
            headers={"WWW-Authenticate": "Bearer"}
        )

    try:
        claims = decode_access_token(token)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token"
        )

    request.state.user = claims
    logger.debug(f"Token validated for user {claims.get('userId')}")
    return claims
