"""Offboarding submission and record models.

Wire names are camelCase (``empName``, ``finalSalary``...) because the
front-end forms post them that way; Python attributes stay snake_case.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class OffboardingRecord(BaseModel):
    """A submission that passed every field rule, ready to be stored."""

    model_config = ConfigDict(frozen=True)

    employee_name: str
    position: str
    department: str
    employee_id: str
    feedback: str
    final_salary: Decimal
    bonus: Decimal
    acknowledgment: str


class StoredOffboardingRecord(OffboardingRecord):
    id: int
    created_at: datetime | None = None


class OffboardingRecordOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    employee_name: str = Field(alias="empName")
    position: str
    department: str
    employee_id: str = Field(alias="empId")
    feedback: str
    final_salary: Decimal = Field(alias="finalSalary")
    bonus: Decimal
    acknowledgment: str
    created_at: datetime | None = Field(default=None, alias="createdAt")


class SubmitResponse(BaseModel):
    message: str
    id: int


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded"]
    timestamp: datetime
    database: Literal["connected", "disconnected"]
