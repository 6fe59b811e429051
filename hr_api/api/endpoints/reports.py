"""
HR reporting endpoints — all HR only.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hr_api.api.deps import get_employee_service, require_hr
from hr_api.core.authorization import Caller
from hr_api.schemas.common import ApiResponse
from hr_api.schemas.report import EmployeesByRole, ReportSummary, RoleCount
from hr_api.services.employees import EmployeeDirectoryService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/role-counts", response_model=ApiResponse[list[RoleCount]])
async def role_counts(
    caller: Caller = Depends(require_hr),
    service: EmployeeDirectoryService = Depends(get_employee_service),
) -> ApiResponse[list[RoleCount]]:
    """Active employees per role; roles without employees report 0."""
    counts = await service.role_counts(caller)
    return ApiResponse[list[RoleCount]].ok(counts, "Role counts retrieved successfully")


@router.get("/employees-by-role", response_model=ApiResponse[list[EmployeesByRole]])
async def employees_by_role(
    caller: Caller = Depends(require_hr),
    service: EmployeeDirectoryService = Depends(get_employee_service),
) -> ApiResponse[list[EmployeesByRole]]:
    groups = await service.employees_by_role(caller)
    return ApiResponse[list[EmployeesByRole]].ok(
        groups, "Employees by role retrieved successfully"
    )


@router.get("/summary", response_model=ApiResponse[ReportSummary])
async def summary(
    caller: Caller = Depends(require_hr),
    service: EmployeeDirectoryService = Depends(get_employee_service),
) -> ApiResponse[ReportSummary]:
    result = await service.summary(caller)
    return ApiResponse[ReportSummary].ok(result, "Summary statistics retrieved successfully")
