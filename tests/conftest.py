"""
Pytest configuration and fixtures for testing.
"""
import os
from datetime import date, time, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import NullPool

from campushub.core.security import create_access_token, hash_password
from campushub.db.gateway import EntityStoreGateway
from campushub.db.session import Database
from campushub.main import create_app


# Test database URL - use environment variable if available (for Docker)
TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///./campushub_test.db"
)

PASSWORD = "Test123!@#"


@pytest.fixture(autouse=True)
def mock_password_hashing(monkeypatch):
    """
    Mock bcrypt password hashing for testing environments where bcrypt cannot be installed.
    """
    class MockPasswordContext:
        def hash(self, password: str) -> str:
            return f"$2b$12$mockedhash{password}"
        
        def verify(self, plain: str, hashed: str) -> bool:
            return hashed == f"$2b$12$mockedhash{plain}"
    
    from campushub.core import security
    monkeypatch.setattr(security, "pwd_context", MockPasswordContext())


@pytest.fixture(autouse=True)
def disable_rate_limiting(monkeypatch):
    """Disable rate limiting for all tests."""
    import campushub.api.v1.routes.auth as auth_routes
    monkeypatch.setattr(auth_routes.limiter, "enabled", False)


@pytest_asyncio.fixture(scope="function")
async def database() -> AsyncGenerator[Database, None]:
    """
    Connected store handle on a freshly created schema.
    Tables are dropped again after the test for complete isolation.
    """
    db = Database(TEST_DATABASE_URL, poolclass=NullPool)
    await db.connect()
    await db.drop_all()
    await db.create_all()
    try:
        yield db
    finally:
        await db.drop_all()
        await db.disconnect()


@pytest.fixture
def gateway(database: Database) -> EntityStoreGateway:
    return EntityStoreGateway(database)


@pytest_asyncio.fixture(scope="function")
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client bound to an app that uses the test database.
    """
    app = create_app(database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def _create_user(gateway: EntityStoreGateway, email: str, role: str, name: str) -> dict:
    result = await gateway.insert(
        "users",
        {"email": email, "hashed_password": hash_password(PASSWORD), "role": role, "name": name},
    )
    assert result.success, result.error
    return result.data


@pytest_asyncio.fixture
async def student(gateway) -> dict:
    """User u1 with the 'student' role."""
    return await _create_user(gateway, "student@example.com", "student", "Test Student")


@pytest_asyncio.fixture
async def other_student(gateway) -> dict:
    return await _create_user(gateway, "student2@example.com", "student", "Second Student")


@pytest_asyncio.fixture
async def teacher(gateway) -> dict:
    return await _create_user(gateway, "teacher@example.com", "teacher", "Test Teacher")


@pytest_asyncio.fixture
async def committee(gateway) -> dict:
    return await _create_user(gateway, "committee@example.com", "committee", "Test Committee")


@pytest_asyncio.fixture
async def event(gateway, committee) -> dict:
    """Event e1 organized by the committee user."""
    result = await gateway.insert(
        "events",
        {
            "name": "Tech Fest",
            "description": "Annual technical festival",
            "date": date.today() + timedelta(days=7),
            "time": time(10, 0),
            "location": "Main Auditorium",
            "organizer_id": committee["id"],
        },
    )
    assert result.success, result.error
    return result.data


def _token(user: dict) -> str:
    return create_access_token(user["id"], user["role"])


@pytest.fixture
def student_headers(student) -> dict:
    return {"Authorization": f"Bearer {_token(student)}"}


@pytest.fixture
def teacher_headers(teacher) -> dict:
    return {"Authorization": f"Bearer {_token(teacher)}"}


@pytest.fixture
def committee_headers(committee) -> dict:
    return {"Authorization": f"Bearer {_token(committee)}"}
