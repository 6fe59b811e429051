"""Pydantic schemas for Employee CRUD."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from hr_api.schemas.common import CamelModel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^\+?[0-9 ().-]{7,20}$")

# stays well under the hasher's byte limit for any UTF-8 input
MAX_PASSWORD_LENGTH = 128


def normalise_email(v: str) -> str:
    v = v.strip().lower()
    if not _EMAIL_RE.match(v):
        raise ValueError("Invalid email format")
    return v


def _check_name(v: str) -> str:
    v = v.strip()
    if len(v) < 2:
        raise ValueError("Name must be at least 2 characters")
    if len(v) > 100:
        raise ValueError("Name cannot exceed 100 characters")
    return v


def _check_phone(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not _PHONE_RE.match(v):
        raise ValueError("Invalid phone number format")
    return v


class EmployeeCreate(CamelModel):
    email: str
    name: str
    address: str | None = Field(default=None, max_length=255)
    cell_number: str | None = None
    role_id: int = Field(ge=1)
    password: str = Field(min_length=6, max_length=MAX_PASSWORD_LENGTH)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalise_email(v)

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("cell_number")
    @classmethod
    def _phone(cls, v: str | None) -> str | None:
        return _check_phone(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Password must not be blank")
        return v


class EmployeeUpdate(CamelModel):
    """Partial update — only fields sent (and not null) are applied.

    ``role_id`` and ``is_active`` are honoured for HR callers only.
    """

    name: str | None = None
    address: str | None = Field(default=None, max_length=255)
    cell_number: str | None = None
    role_id: int | None = Field(default=None, ge=1)
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str | None) -> str | None:
        return _check_name(v) if v is not None else v

    @field_validator("cell_number")
    @classmethod
    def _phone(cls, v: str | None) -> str | None:
        return _check_phone(v)


class EmployeeRead(CamelModel):
    id: int
    email: str
    name: str
    address: str | None
    cell_number: str | None
    role_id: int
    role_name: str = "Unknown"
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("role_name", mode="before")
    @classmethod
    def _role_name(cls, v: str | None) -> str:
        return v or "Unknown"
