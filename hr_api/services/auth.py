"""
Authentication service — login, own profile, and password change.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.core.authorization import Caller, RoleName
from hr_api.core.errors import (AppError, AuthErrors, CommonErrors,
                                EmployeeErrors, service_operation)
from hr_api.core.security import InvalidInput, PasswordHasher, TokenService
from hr_api.models.credential import UserPassword
from hr_api.models.employee import Employee
from hr_api.schemas.auth import LoginResponse
from hr_api.schemas.employee import EmployeeRead

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession, tokens: TokenService) -> None:
        self.db = db
        self.tokens = tokens

    async def _credential(self, user_id: int) -> UserPassword | None:
        result = await self.db.execute(select(UserPassword).where(UserPassword.user_id == user_id))
        return result.scalar_one_or_none()

    @service_operation("login")
    async def login(self, email: str, password: str) -> LoginResponse:
        result = await self.db.execute(select(Employee).where(Employee.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            logger.warning("Login attempt failed: User not found - %s", email)
            raise AppError(AuthErrors.INVALID_CREDENTIALS)

        if not user.is_active:
            logger.warning("Login attempt failed: Account inactive - UserId: %d", user.id)
            raise AppError(EmployeeErrors.USER_INACTIVE)

        credential = await self._credential(user.id)
        if credential is None:
            logger.error("Password record not found for UserId: %d", user.id)
            raise AppError(CommonErrors.INTERNAL_SERVER_ERROR)

        if not PasswordHasher.verify(password, credential.password_hash):
            logger.warning("Login attempt failed: Invalid credentials - UserId: %d", user.id)
            raise AppError(AuthErrors.INVALID_CREDENTIALS)

        role = user.role_name or RoleName.EMPLOYEE.value
        token = self.tokens.issue(user.id, user.email, role)
        logger.info("User logged in successfully - UserId: %d, Email: %s", user.id, user.email)
        return LoginResponse(
            token=token,
            token_type="Bearer",
            expires_in=self.tokens.expiration_seconds(),
            user=EmployeeRead.model_validate(user),
        )

    @service_operation("read own profile")
    async def current_user(self, caller: Caller) -> EmployeeRead:
        result = await self.db.execute(select(Employee).where(Employee.id == caller.user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise AppError(EmployeeErrors.USER_NOT_FOUND)
        return EmployeeRead.model_validate(user)

    @service_operation("change password")
    async def change_password(
        self, caller: Caller, current_password: str, new_password: str
    ) -> None:
        if caller.user_id is None:
            raise AppError(AuthErrors.TOKEN_INVALID)

        credential = await self._credential(caller.user_id)
        if credential is None:
            raise AppError(EmployeeErrors.USER_NOT_FOUND)

        if not PasswordHasher.verify(current_password, credential.password_hash):
            logger.warning("Password change rejected: Invalid credentials - UserId: %d", caller.user_id)
            raise AppError(AuthErrors.INVALID_CREDENTIALS)

        try:
            credential.password_hash = PasswordHasher.hash(new_password)
        except InvalidInput as exc:
            raise AppError(CommonErrors.VALIDATION_ERROR, details=str(exc)) from exc
        await self.db.commit()
        logger.info("Password changed - UserId: %d", caller.user_id)
