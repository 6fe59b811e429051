"""
Employee directory service — CRUD and HR reports over employee records.

Every operation re-evaluates the caller against the same policy the route
declares (see ``hr_api.core.authorization``) before it touches the
database, so the service is safe to call from anywhere, not only from
the HTTP layer.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.core.authorization import Caller, Policy, authorize
from hr_api.core.errors import AppError, EmployeeErrors, service_operation
from hr_api.core.security import InvalidInput, PasswordHasher
from hr_api.models.credential import UserPassword
from hr_api.models.employee import Employee
from hr_api.models.role import Role
from hr_api.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from hr_api.schemas.report import EmployeesByRole, ReportSummary, RoleCount

logger = logging.getLogger(__name__)


class EmployeeDirectoryService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ── Queries ─────────────────────────────────────────────────────
    async def _fetch(self, employee_id: int) -> Employee | None:
        # populate_existing reloads the role after role_id changes in this session
        result = await self.db.execute(
            select(Employee)
            .where(Employee.id == employee_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _role_exists(self, role_id: int) -> bool:
        result = await self.db.execute(select(Role.id).where(Role.id == role_id))
        return result.scalar_one_or_none() is not None

    async def _email_exists(self, email: str) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(Employee).where(Employee.email == email)
        )
        return result.scalar_one() > 0

    async def _roles(self) -> list[Role]:
        result = await self.db.execute(select(Role).order_by(Role.id))
        return list(result.scalars().all())

    # ── CRUD ────────────────────────────────────────────────────────
    @service_operation("get employee")
    async def get_by_id(self, employee_id: int, caller: Caller) -> EmployeeRead:
        authorize(Policy.SAME_USER_OR_HR, caller, employee_id)

        employee = await self._fetch(employee_id)
        if employee is None:
            logger.warning("Employee not found - EmployeeId: %d", employee_id)
            raise AppError(EmployeeErrors.USER_NOT_FOUND)
        return EmployeeRead.model_validate(employee)

    @service_operation("list employees")
    async def get_all(self, caller: Caller) -> list[EmployeeRead]:
        authorize(Policy.HR_ONLY, caller)

        result = await self.db.execute(select(Employee).order_by(Employee.name))
        return [EmployeeRead.model_validate(e) for e in result.scalars().all()]

    @service_operation("create employee")
    async def create(self, body: EmployeeCreate, caller: Caller) -> EmployeeRead:
        authorize(Policy.HR_ONLY, caller)

        if await self._email_exists(body.email):
            logger.warning("Attempt to create employee with existing email - Email: %s", body.email)
            raise AppError(EmployeeErrors.USER_ALREADY_EXISTS)

        if not await self._role_exists(body.role_id):
            logger.warning("Attempt to create employee with invalid role - RoleId: %d", body.role_id)
            raise AppError(EmployeeErrors.INVALID_EMPLOYEE_DATA, details="Invalid role specified")

        try:
            password_hash = PasswordHasher.hash(body.password)
        except InvalidInput as exc:
            raise AppError(EmployeeErrors.INVALID_EMPLOYEE_DATA, details=str(exc)) from exc

        # Employee and password rows are committed together or not at all.
        employee = Employee(
            email=body.email,
            name=body.name,
            address=body.address,
            cell_number=body.cell_number,
            role_id=body.role_id,
            is_active=True,
        )
        employee.credential = UserPassword(password_hash=password_hash)
        self.db.add(employee)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.warning("Concurrent create for email %s rejected", body.email)
            raise AppError(EmployeeErrors.USER_ALREADY_EXISTS) from exc

        created = await self._fetch(employee.id)
        logger.info(
            "Employee created successfully - EmployeeId: %d, Email: %s",
            employee.id,
            employee.email,
        )
        return EmployeeRead.model_validate(created)

    @service_operation("update employee")
    async def update(
        self, employee_id: int, body: EmployeeUpdate, caller: Caller
    ) -> EmployeeRead:
        authorize(Policy.SAME_USER_OR_HR, caller, employee_id)

        employee = await self._fetch(employee_id)
        if employee is None:
            logger.warning("Update failed: Employee not found - EmployeeId: %d", employee_id)
            raise AppError(EmployeeErrors.USER_NOT_FOUND)

        changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}

        if not caller.is_hr:
            # Non-HR callers may not change role or status; silently ignored.
            changes.pop("role_id", None)
            changes.pop("is_active", None)
        elif "role_id" in changes and not await self._role_exists(changes["role_id"]):
            raise AppError(EmployeeErrors.INVALID_EMPLOYEE_DATA, details="Invalid role specified")

        for field, value in changes.items():
            setattr(employee, field, value)

        await self.db.commit()
        logger.info("Employee updated successfully - EmployeeId: %d", employee_id)

        self.db.expire(employee)

        updated = await self._fetch(employee_id)
        return EmployeeRead.model_validate(updated)

    @service_operation("delete employee")
    async def delete(self, employee_id: int, caller: Caller) -> None:
        authorize(Policy.HR_ONLY, caller)

        employee = await self._fetch(employee_id)
        if employee is None:
            logger.warning("Delete failed: Employee not found - EmployeeId: %d", employee_id)
            raise AppError(EmployeeErrors.USER_NOT_FOUND)

        # Remove the password row explicitly; not every backend enforces ON DELETE CASCADE.
        await self.db.execute(sa_delete(UserPassword).where(UserPassword.user_id == employee_id))
        await self.db.execute(sa_delete(Employee).where(Employee.id == employee_id))
        await self.db.commit()
        logger.info("Employee deleted successfully - EmployeeId: %d", employee_id)

    # ── Reports ─────────────────────────────────────────────────────
    @service_operation("role counts report")
    async def role_counts(self, caller: Caller) -> list[RoleCount]:
        authorize(Policy.HR_ONLY, caller)

        roles = await self._roles()
        result = await self.db.execute(
            select(Employee.role_id, func.count())
            .where(Employee.is_active.is_(True))
            .group_by(Employee.role_id)
        )
        counts = dict(result.all())
        return [
            RoleCount(
                role_id=role.id,
                role_name=role.role_name,
                employee_count=counts.get(role.id, 0),
            )
            for role in roles
        ]

    @service_operation("employees by role report")
    async def employees_by_role(self, caller: Caller) -> list[EmployeesByRole]:
        authorize(Policy.HR_ONLY, caller)

        roles = await self._roles()
        result = await self.db.execute(select(Employee).order_by(Employee.name))

        by_role: dict[int, list[EmployeeRead]] = defaultdict(list)
        for employee in result.scalars().all():
            by_role[employee.role_id].append(EmployeeRead.model_validate(employee))

        return [
            EmployeesByRole(
                role_id=role.id,
                role_name=role.role_name,
                employees=by_role.get(role.id, []),
            )
            for role in roles
        ]

    async def summary(self, caller: Caller) -> ReportSummary:
        counts = await self.role_counts(caller)
        return ReportSummary(
            total_employees=sum(rc.employee_count for rc in counts),
            role_breakdown=counts,
            generated_at=datetime.now(timezone.utc),
        )
