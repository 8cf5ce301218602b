"""
Pytest configuration and shared fixtures.

Environment is set before the package is imported: settings are read once
at import time and JWT_SECRET is mandatory.
"""
import os

os.environ["JWT_SECRET"] = "test-secret-key-for-pytest"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost, keeps the suite fast

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from apptracker.db import connection
from apptracker.main import app


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory database for each test."""
    await connection.init_db()
    yield
    await connection.close_db()


@pytest_asyncio.fixture
async def db_session(database):
    """Session bound to the fresh test database."""
    async with connection.async_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(database):
    """HTTP client calling the ASGI app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
