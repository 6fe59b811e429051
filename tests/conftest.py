"""
Shared test fixtures for the HR Application API test suite.

Async throughout (aiosqlite + AsyncSession + httpx ASGITransport).
"""

import os
import sys
from collections.abc import Awaitable, Callable
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-0123456789abcdef0123456789abcdef"

from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.api.deps import get_db, get_token_service
from hr_api.core.config import settings
from hr_api.core.security import PasswordHasher, TokenService
from hr_api.db.base import Base
from hr_api.db.session import make_engine, make_session_factory
from hr_api.main import app, seed_reference_data
from hr_api.models.credential import UserPassword
from hr_api.models.employee import Employee
from hr_api.schemas.employee import normalise_email

HR_ROLE_ID = 1
EMPLOYEE_ROLE_ID = 2
DEFAULT_PASSWORD = "secret123"

# A separate engine shared by the app (via dependency override) and the tests
test_engine = make_engine("sqlite+aiosqlite:///:memory:")
TestingSessionLocal = make_session_factory(test_engine)


@pytest.fixture(autouse=True)
async def setup_db():
    """Create all tables and seed roles + the first HR account; drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with TestingSessionLocal() as session:
        await seed_reference_data(session)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestingSessionLocal() as session:
        yield session


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def token_service() -> TokenService:
    return get_token_service()


# ── Users & tokens ──────────────────────────────────────────────────
@pytest.fixture
async def hr_user(db_session: AsyncSession) -> Employee:
    result = await db_session.execute(
        select(Employee).where(Employee.email == normalise_email(settings.FIRST_HR_EMAIL))
    )
    return result.scalar_one()


@pytest.fixture
def make_employee(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[Employee]]:
    """Factory inserting an employee with a password row."""

    async def _make(
        email: str,
        name: str = "Test Employee",
        role_id: int = EMPLOYEE_ROLE_ID,
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
    ) -> Employee:
        employee = Employee(email=email, name=name, role_id=role_id, is_active=is_active)
        employee.credential = UserPassword(password_hash=PasswordHasher.hash(password))
        db_session.add(employee)
        await db_session.commit()
        return employee

    return _make


@pytest.fixture
def auth_headers(token_service: TokenService) -> Callable[[Employee, str], dict[str, str]]:
    """Build an Authorization header for *employee* acting with *role*."""

    def _headers(employee: Employee, role: str) -> dict[str, str]:
        token = token_service.issue(employee.id, employee.email, role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def hr_headers(auth_headers, hr_user: Employee) -> dict[str, str]:
    return auth_headers(hr_user, "HR")
