"""
Auth endpoints — login, own profile, password change.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from hr_api.api.deps import get_auth_service, get_current_caller
from hr_api.core.authorization import Caller
from hr_api.core.config import settings
from hr_api.schemas.auth import ChangePasswordRequest, LoginRequest, LoginResponse
from hr_api.schemas.common import ApiResponse
from hr_api.schemas.employee import EmployeeRead
from hr_api.services.auth import AuthService

# Rate limiter, keyed by client IP
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=ApiResponse[LoginResponse])
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> ApiResponse[LoginResponse]:
    """Exchange email + password for a bearer token."""
    result = await auth.login(body.email, body.password)
    return ApiResponse[LoginResponse].ok(result, "Login successful")


@router.get("/me", response_model=ApiResponse[EmployeeRead])
async def read_current_user(
    caller: Caller = Depends(get_current_caller),
    auth: AuthService = Depends(get_auth_service),
) -> ApiResponse[EmployeeRead]:
    """Return the profile of the currently authenticated user."""
    result = await auth.current_user(caller)
    return ApiResponse[EmployeeRead].ok(result, "Profile retrieved successfully")


@router.post("/change-password", response_model=ApiResponse[None])
async def change_password(
    body: ChangePasswordRequest,
    caller: Caller = Depends(get_current_caller),
    auth: AuthService = Depends(get_auth_service),
) -> ApiResponse[None]:
    await auth.change_password(caller, body.current_password, body.new_password)
    return ApiResponse[None].ok(message="Password changed successfully")
