"""
Application Tracker - Main Application Entry Point
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import re

from apptracker.api import applications, auth
from apptracker.api.validation import format_validation_errors
from apptracker.config import settings
from apptracker.db import init_db, close_db
from apptracker.version import __version__

JWT_PATTERN = re.compile(r'eyJ[A-Za-z0-9_-]*\.eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*')
BCRYPT_PATTERN = re.compile(r'\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}')


class SensitiveDataFilter(logging.Filter):
    """Filter to redact tokens and password hashes from logs"""

    def filter(self, record):
        if hasattr(record, 'msg'):
            msg = str(record.msg)
            msg = JWT_PATTERN.sub('[JWT_REDACTED]', msg)
            msg = BCRYPT_PATTERN.sub('[HASH_REDACTED]', msg)
            record.msg = msg
        return True


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Add filter to all loggers
for handler in logging.root.handlers:
    handler.addFilter(SensitiveDataFilter())

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - handles startup and shutdown"""
    logger.info("Starting Application Tracker")
    logger.info(f"Version: {__version__}")
    logger.info(f"Environment: {settings.environment}")

    await init_db()

    yield

    logger.info("Shutting down...")
    await close_db()


app = FastAPI(
    title="Application Tracker",
    description="CRUD API for application records with user registration and login",
    version=__version__,
    lifespan=lifespan,
)


# ============================================
# CORS Middleware Configuration
# ============================================

allowed_origins = settings.allowed_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    # Credentials can't be combined with a wildcard origin
    allow_credentials="*" not in allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# Error rendering
# ============================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render validation failures as 400 with the full error list"""
    errors = format_validation_errors(exc.errors())
    logger.warning(f"Validation failed for {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": errors}
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": <message>}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


# Register routes
app.include_router(applications.router, tags=["applications"])
app.include_router(auth.router, tags=["auth"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "app": "Application Tracker",
        "version": __version__,
        "status": "running",
        "environment": settings.environment,
    }


@app.get("/health")
async def health_check():
    """Health check endpoint - no dependency checks"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment
    }


def run():
    """Start the server with uvicorn on the configured host and port"""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
