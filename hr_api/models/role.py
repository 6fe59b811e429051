"""
Role model — static reference data ("HR", "Employee"), seeded at startup.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from hr_api.db.base import Base


class Role(Base):
    __tablename__ = "roles"

    id: int = Column(Integer, primary_key=True)  # type: ignore[assignment]
    role_name: str = Column(String(50), unique=True, nullable=False)  # type: ignore[assignment]
    description: str | None = Column(String(255), nullable=True)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
