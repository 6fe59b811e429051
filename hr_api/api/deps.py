"""
FastAPI dependencies — database session, bearer-token auth, policy guards.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from functools import lru_cache

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.core.authorization import Caller, Policy, authorize
from hr_api.core.config import settings
from hr_api.core.errors import AppError, AuthErrors
from hr_api.core.security import TokenConfig, TokenService
from hr_api.db.session import async_session_factory
from hr_api.services.auth import AuthService
from hr_api.services.employees import EmployeeDirectoryService

# primary keys are 32-bit integers
MAX_EMPLOYEE_ID = 2_147_483_647

# auto_error=False so a missing header maps to TOKEN_MISSING instead of a bare 403
bearer_scheme = HTTPBearer(auto_error=False)


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Token service (built once from settings) ────────────────────────
@lru_cache
def get_token_service() -> TokenService:
    return TokenService(TokenConfig.from_settings(settings))


# ── Services ────────────────────────────────────────────────────────
def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeDirectoryService:
    return EmployeeDirectoryService(db)


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(db, tokens)


# ── Auth dependencies ───────────────────────────────────────────────
async def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Caller:
    """Validate the bearer token and return the identity it carries.

    The token is trusted on its own; the employee row is not re-read here.
    """
    if credentials is None or not credentials.credentials:
        raise AppError(AuthErrors.TOKEN_MISSING)

    claims = tokens.validate(credentials.credentials)
    return Caller(user_id=claims.subject, role=claims.role, email=claims.email)


def _resource_owner_id(request: Request) -> int | None:
    """Employee id from the path, or None on routes without one.

    Rejected here, before any policy runs, so a malformed id answers 400
    whatever the caller's role.
    """
    raw = request.path_params.get("employee_id")
    if raw is None:
        return None
    try:
        owner_id = int(raw)
    except (TypeError, ValueError):
        owner_id = None
    if owner_id is None or not 1 <= owner_id <= MAX_EMPLOYEE_ID:
        raise RequestValidationError(
            [
                {
                    "type": "value_error",
                    "loc": ("path", "employee_id"),
                    "msg": f"Employee id must be an integer between 1 and {MAX_EMPLOYEE_ID}",
                    "input": raw,
                }
            ]
        )
    return owner_id


def require_policy(policy: Policy) -> Callable[..., Awaitable[Caller]]:
    """Dependency factory: evaluate *policy* before the endpoint runs."""

    async def _guard(request: Request, caller: Caller = Depends(get_current_caller)) -> Caller:
        authorize(policy, caller, _resource_owner_id(request))
        return caller

    _guard.__name__ = f"require_{policy.name.lower()}"
    return _guard


require_hr = require_policy(Policy.HR_ONLY)
require_same_user_or_hr = require_policy(Policy.SAME_USER_OR_HR)
