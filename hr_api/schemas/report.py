"""Pydantic schemas for HR reports."""

from __future__ import annotations

from datetime import datetime

from hr_api.schemas.common import CamelModel
from hr_api.schemas.employee import EmployeeRead


class RoleCount(CamelModel):
    role_id: int
    role_name: str
    employee_count: int


class EmployeesByRole(CamelModel):
    role_id: int
    role_name: str
    employees: list[EmployeeRead]


class ReportSummary(CamelModel):
    total_employees: int
    role_breakdown: list[RoleCount]
    generated_at: datetime
