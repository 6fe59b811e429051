"""
API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from hr_api.api.endpoints import auth, employees, health, reports

api_router = APIRouter()

# Login, profile, password change
api_router.include_router(auth.router)

# Employee CRUD
api_router.include_router(employees.router)

# HR reports
api_router.include_router(reports.router)

# Health
api_router.include_router(health.router)
