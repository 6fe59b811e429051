"""Pydantic schemas for login and password management."""

from __future__ import annotations

from pydantic import Field, field_validator

from hr_api.schemas.common import CamelModel
from hr_api.schemas.employee import MAX_PASSWORD_LENGTH, EmployeeRead


class LoginRequest(CamelModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("Email is required")
        return v


class LoginResponse(CamelModel):
    token: str
    token_type: str = "Bearer"
    expires_in: int
    user: EmployeeRead


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=MAX_PASSWORD_LENGTH)

    @field_validator("new_password")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Password must not be blank")
        return v
