"""
Global exception handlers — every failure leaves as the JSON error envelope.

Stack traces never reach the client; unexpected errors are logged here and
answered with a catalogued code.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hr_api.core.errors import AppError, AuthErrors, CommonErrors
from hr_api.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    400: CommonErrors.BAD_REQUEST,
    401: AuthErrors.TOKEN_MISSING,
    403: AuthErrors.UNAUTHORIZED,
    404: CommonErrors.RESOURCE_NOT_FOUND,
    405: CommonErrors.METHOD_NOT_ALLOWED,
    429: CommonErrors.TOO_MANY_REQUESTS,
}


def _envelope(error: ErrorResponse, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=jsonable_encoder(error.model_dump(by_alias=True, exclude_none=True)),
        headers=headers,
    )


async def _app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return _envelope(ErrorResponse.from_error_code(exc.code, exc.details), headers)


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        # drop the leading "body" / "query" / "path" segment
        loc = [str(part) for part in err.get("loc", ())[1:]] or ["request"]
        message = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        errors.setdefault(".".join(loc), []).append(message)
    return _envelope(ErrorResponse.validation_error(errors))


async def _http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = _STATUS_CODES.get(exc.status_code)
    if code is None:
        code = (
            CommonErrors.INTERNAL_SERVER_ERROR
            if exc.status_code >= 500
            else CommonErrors.BAD_REQUEST
        )
    error = ErrorResponse.from_error_code(code, str(exc.detail))
    return _envelope(error, getattr(exc, "headers", None))


async def _rate_limit_handler(_request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded: %s", exc.detail)
    error = ErrorResponse.from_error_code(CommonErrors.TOO_MANY_REQUESTS, f"Limit: {exc.detail}")
    return _envelope(error)


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return _envelope(ErrorResponse.from_error_code(CommonErrors.DATABASE_ERROR))


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _envelope(ErrorResponse.from_error_code(CommonErrors.INTERNAL_SERVER_ERROR))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(AppError, _app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
