"""
Authorization policy evaluator.

Two named policies exist and nothing else compares role strings:

- ``HR_ONLY``          — caller's role is HR.
- ``SAME_USER_OR_HR``  — caller is HR, or the caller's id equals the id of
  the employee record being accessed.

The API layer evaluates the route's policy once per request before the
endpoint runs; the employee service evaluates it again before touching
the database.  Both go through :func:`authorize`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from hr_api.core.errors import AppError, AuthErrors

logger = logging.getLogger(__name__)


class RoleName(str, Enum):
    HR = "HR"
    EMPLOYEE = "Employee"


class Policy(str, Enum):
    HR_ONLY = "HrOnly"
    SAME_USER_OR_HR = "SameUserOrHr"


@dataclass(frozen=True)
class Caller:
    """Identity extracted from a validated bearer token."""

    user_id: int | None
    role: str | None
    email: str | None = None

    @property
    def is_hr(self) -> bool:
        return self.role == RoleName.HR.value


def is_authorized(policy: Policy, caller: Caller, owner_id: int | None = None) -> bool:
    """Pure decision: may *caller* act on the record owned by *owner_id*?"""
    if policy is Policy.HR_ONLY:
        return caller.is_hr

    if policy is Policy.SAME_USER_OR_HR:
        if caller.user_id is None:
            return False
        if caller.is_hr:
            return True
        if owner_id is None:
            return False
        return caller.user_id == owner_id

    return False


def authorize(policy: Policy, caller: Caller, owner_id: int | None = None) -> None:
    """Raise ``INSUFFICIENT_PERMISSIONS`` unless *policy* allows the caller."""
    if not is_authorized(policy, caller, owner_id):
        logger.warning(
            "Access denied by %s - UserId: %s, Role: %s, ResourceId: %s",
            policy.value,
            caller.user_id,
            caller.role,
            owner_id,
        )
        raise AppError(AuthErrors.INSUFFICIENT_PERMISSIONS)
