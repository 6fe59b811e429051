"""
Employee CRUD endpoints.

- GET / PUT on a single employee: the employee themselves or HR.
- Listing, creating and deleting: HR only.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from hr_api.api.deps import (MAX_EMPLOYEE_ID, get_employee_service, require_hr,
                             require_same_user_or_hr)
from hr_api.core.authorization import Caller
from hr_api.schemas.common import ApiResponse
from hr_api.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from hr_api.services.employees import EmployeeDirectoryService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=ApiResponse[list[EmployeeRead]])
async def list_employees(
    caller: Caller = Depends(require_hr),
    service: EmployeeDirectoryService = Depends(get_employee_service),
) -> ApiResponse[list[EmployeeRead]]:
    employees = await service.get_all(caller)
    return ApiResponse[list[EmployeeRead]].ok(
        employees, f"{len(employees)} employees retrieved successfully"
    )


@router.post("", response_model=ApiResponse[EmployeeRead], status_code=201)
async def create_employee(
    body: EmployeeCreate,
    caller: Caller = Depends(require_hr),
    service: EmployeeDirectoryService = Depends(get_employee_service),
) -> ApiResponse[EmployeeRead]:
    employee = await service.create(body, caller)
    return ApiResponse[EmployeeRead].ok(employee, "Employee created successfully", status_code=201)


@router.get("/{employee_id}", response_model=ApiResponse[EmployeeRead])
async def get_employee(
    employee_id: int = Path(ge=1, le=MAX_EMPLOYEE_ID),
    caller: Caller = Depends(require_same_user_or_hr),
    service: EmployeeDirectoryService = Depends(get_employee_service),
) -> ApiResponse[EmployeeRead]:
    employee = await service.get_by_id(employee_id, caller)
    return ApiResponse[EmployeeRead].ok(employee, "Employee retrieved successfully")


@router.put("/{employee_id}", response_model=ApiResponse[EmployeeRead])
async def update_employee(
    body: EmployeeUpdate,
    employee_id: int = Path(ge=1, le=MAX_EMPLOYEE_ID),
    caller: Caller = Depends(require_same_user_or_hr),
    service: EmployeeDirectoryService = Depends(get_employee_service),
) -> ApiResponse[EmployeeRead]:
    employee = await service.update(employee_id, body, caller)
    return ApiResponse[EmployeeRead].ok(employee, "Employee updated successfully")


@router.delete("/{employee_id}", response_model=ApiResponse[None])
async def delete_employee(
    employee_id: int = Path(ge=1, le=MAX_EMPLOYEE_ID),
    caller: Caller = Depends(require_hr),
    service: EmployeeDirectoryService = Depends(get_employee_service),
) -> ApiResponse[None]:
    await service.delete(employee_id, caller)
    return ApiResponse[None].ok(message=f"Employee with ID {employee_id} deleted successfully")
