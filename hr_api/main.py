"""
HR Application API — application entry point.

Builds the FastAPI app, seeds the reference roles and the first HR
account, and configures logging.  Run with `uvicorn hr_api.main:app`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.api.api import api_router
from hr_api.api.endpoints.auth import limiter
from hr_api.core.authorization import RoleName
from hr_api.core.config import settings
from hr_api.core.exceptions import register_exception_handlers
from hr_api.core.security import PasswordHasher
from hr_api.db.base import Base
from hr_api.db.session import async_session_factory, engine

# Ensure all models are imported so metadata.create_all can see them
from hr_api.models.credential import UserPassword
from hr_api.models.employee import Employee
from hr_api.models.role import Role
from hr_api.schemas.employee import normalise_email

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_ROLES = (
    (1, RoleName.HR.value, "Human resources staff with full access"),
    (2, RoleName.EMPLOYEE.value, "Regular employee with access to own record"),
)


async def seed_reference_data(
    session: AsyncSession,
    hr_email: str | None = None,
    hr_password: str | None = None,
) -> None:
    """Insert the static roles and the first HR account if they are missing.

    The account defaults to ``FIRST_HR_EMAIL`` / ``FIRST_HR_PASSWORD``; its
    email is normalised the same way login normalises it.
    """
    existing = set((await session.execute(select(Role.id))).scalars().all())
    for role_id, name, description in DEFAULT_ROLES:
        if role_id not in existing:
            session.add(Role(id=role_id, role_name=name, description=description))
    await session.commit()

    email = normalise_email(hr_email or settings.FIRST_HR_EMAIL)
    result = await session.execute(select(Employee).where(Employee.email == email))
    if result.scalar_one_or_none() is None:
        hr_user = Employee(
            email=email,
            name=settings.FIRST_HR_NAME,
            role_id=1,
            is_active=True,
        )
        hr_user.credential = UserPassword(
            password_hash=PasswordHasher.hash(hr_password or settings.FIRST_HR_PASSWORD)
        )
        session.add(hr_user)
        await session.commit()
        logger.info("Default HR account created: %s (password: <redacted>)", email)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    async with async_session_factory() as session:
        await seed_reference_data(session)

    logger.info("%s v%s started", settings.PROJECT_NAME, settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="REST API for HR employee management with JWT authentication",
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Login rate limiting
    application.state.limiter = limiter

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_PREFIX)

    @application.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "message": f"Welcome to {settings.PROJECT_NAME}",
            "version": settings.VERSION,
            "documentation": "/docs",
            "endpoints": {
                "login": f"POST {settings.API_PREFIX}/auth/login",
                "employees": f"GET {settings.API_PREFIX}/employees",
                "reports": f"GET {settings.API_PREFIX}/reports/role-counts",
            },
        }

    return application


app = create_app()
