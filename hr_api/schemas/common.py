"""Response envelopes shared by every endpoint."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from hr_api.core.errors import CommonErrors, ErrorCode, http_status_for, message_for

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base schema — camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    status_code: int = 200
    message: str = "Request completed successfully"
    data: T | None = None
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def ok(cls, data: T | None = None, message: str | None = None, status_code: int = 200):
        return cls(
            data=data,
            message=message or "Request completed successfully",
            status_code=status_code,
        )


class ErrorResponse(CamelModel):
    success: bool = False
    status_code: int
    error_code: int
    message: str
    details: str | None = None
    validation_errors: dict[str, list[str]] | None = None
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_error_code(cls, code: ErrorCode, details: str | None = None) -> ErrorResponse:
        return cls(
            status_code=http_status_for(code),
            error_code=int(code),
            message=message_for(code),
            details=details,
        )

    @classmethod
    def validation_error(cls, validation_errors: dict[str, list[str]]) -> ErrorResponse:
        return cls(
            status_code=http_status_for(CommonErrors.VALIDATION_ERROR),
            error_code=int(CommonErrors.VALIDATION_ERROR),
            message="One or more validation errors occurred.",
            validation_errors=validation_errors,
        )
