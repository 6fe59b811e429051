"""
Error catalogue — every failure the API reports has one code here.

Each code maps to exactly one HTTP status and one client-facing message.
Services raise :class:`AppError`; the exception handlers in
``hr_api.core.exceptions`` turn it into the JSON error envelope.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from enum import IntEnum
from typing import ParamSpec, TypeVar

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class EmployeeErrors(IntEnum):
    USER_NOT_FOUND = 1001
    USER_ALREADY_EXISTS = 1002
    USER_INACTIVE = 1003
    INVALID_EMPLOYEE_DATA = 1004
    INVALID_EMAIL = 1005


class AuthErrors(IntEnum):
    INVALID_CREDENTIALS = 2001
    UNAUTHORIZED = 2002
    TOKEN_MISSING = 2003
    TOKEN_EXPIRED = 2004
    TOKEN_INVALID = 2005
    ACCOUNT_LOCKED = 2006
    INSUFFICIENT_PERMISSIONS = 2007


class CommonErrors(IntEnum):
    INTERNAL_SERVER_ERROR = 3001
    VALIDATION_ERROR = 3002
    REQUIRED_FIELD_MISSING = 3003
    DATABASE_ERROR = 3004
    RESOURCE_NOT_FOUND = 3005
    BAD_REQUEST = 3006
    METHOD_NOT_ALLOWED = 3007
    TOO_MANY_REQUESTS = 3008


ErrorCode = EmployeeErrors | AuthErrors | CommonErrors

# (status code, message)
_ERROR_TABLE: dict[ErrorCode, tuple[int, str]] = {
    EmployeeErrors.USER_NOT_FOUND: (404, "The requested employee was not found."),
    EmployeeErrors.USER_ALREADY_EXISTS: (409, "An employee with this email already exists."),
    EmployeeErrors.USER_INACTIVE: (403, "This employee account is inactive."),
    EmployeeErrors.INVALID_EMPLOYEE_DATA: (400, "The employee data provided is invalid."),
    EmployeeErrors.INVALID_EMAIL: (400, "The email format is invalid."),
    AuthErrors.INVALID_CREDENTIALS: (401, "Invalid email or password."),
    AuthErrors.UNAUTHORIZED: (403, "You are not authorized to perform this action."),
    AuthErrors.TOKEN_MISSING: (401, "Authentication token is missing."),
    AuthErrors.TOKEN_EXPIRED: (401, "Your session has expired. Please login again."),
    AuthErrors.TOKEN_INVALID: (401, "Invalid authentication token."),
    AuthErrors.ACCOUNT_LOCKED: (
        423,
        "Your account has been locked due to too many failed login attempts.",
    ),
    AuthErrors.INSUFFICIENT_PERMISSIONS: (
        403,
        "You do not have permission to access this resource.",
    ),
    CommonErrors.INTERNAL_SERVER_ERROR: (
        500,
        "An unexpected error occurred. Please try again later.",
    ),
    CommonErrors.VALIDATION_ERROR: (400, "The request contains validation errors."),
    CommonErrors.REQUIRED_FIELD_MISSING: (400, "Required field is missing from the request."),
    CommonErrors.DATABASE_ERROR: (500, "A database error occurred. Please try again later."),
    CommonErrors.RESOURCE_NOT_FOUND: (404, "The requested resource was not found."),
    CommonErrors.BAD_REQUEST: (400, "The request is invalid or malformed."),
    CommonErrors.METHOD_NOT_ALLOWED: (405, "The HTTP method is not allowed for this resource."),
    CommonErrors.TOO_MANY_REQUESTS: (429, "Too many requests. Please try again later."),
}


def http_status_for(code: ErrorCode) -> int:
    return _ERROR_TABLE.get(code, (500, ""))[0]


def message_for(code: ErrorCode) -> str:
    return _ERROR_TABLE.get(code, (500, "An unknown error occurred."))[1]


class AppError(Exception):
    """Domain failure carrying a catalogued error code."""

    def __init__(self, code: ErrorCode, details: str | None = None) -> None:
        self.code = code
        self.details = details
        self.status_code = http_status_for(code)
        self.message = message_for(code)
        super().__init__(details or self.message)


def service_operation(
    name: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Surface unexpected failures of a service call as InternalServerError.

    ``AppError`` passes through untouched; anything else is logged and
    re-raised with the original message attached as ``details``.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except AppError:
                raise
            except Exception as exc:
                logger.exception("Error during %s", name)
                raise AppError(CommonErrors.INTERNAL_SERVER_ERROR, details=str(exc)) from exc

        return wrapper

    return decorator
