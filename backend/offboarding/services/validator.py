"""Field rules for offboarding submissions.

Rules run in a fixed order and the first failure wins, so the error a client
sees for a given payload is always the same.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from offboarding.core.errors import InvalidFieldError
from offboarding.models.offboarding import OffboardingRecord

DEPARTMENTS: frozenset[str] = frozenset({"Engineering", "Marketing", "HR", "Finance"})

NAME_MAX_LENGTH = 30
POSITION_MAX_LENGTH = 30
FEEDBACK_MAX_LENGTH = 500
ACKNOWLEDGMENT_MAX_LENGTH = 300

MIN_FINAL_SALARY = Decimal("1000")
MAX_FINAL_SALARY = Decimal("1000000")
MIN_BONUS = Decimal("0")
MAX_BONUS = Decimal("100000")

_CENTS = Decimal("0.01")

_NAME_RE = re.compile(r"[A-Z][a-zA-Z]+(?: [A-Z][a-zA-Z]+)*")
_POSITION_RE = re.compile(r"[A-Za-z]+(?: [A-Za-z]+)*")
_EMPLOYEE_ID_RE = re.compile(r"ATS0(?!000)\d{3}", re.ASCII)
# Digits, whitespace, underscores and symbols only, i.e. no letter at all.
_NO_LETTERS_RE = re.compile(r"[0-9\s\W_]+", re.ASCII)
_NUMBER_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*", re.ASCII)


def is_valid_employee_name(value: Any) -> bool:
    return (
        isinstance(value, str)
        and len(value) <= NAME_MAX_LENGTH
        and _NAME_RE.fullmatch(value) is not None
    )


def is_valid_position(value: Any) -> bool:
    return (
        isinstance(value, str)
        and len(value) <= POSITION_MAX_LENGTH
        and _POSITION_RE.fullmatch(value) is not None
    )


def is_valid_department(value: Any) -> bool:
    return isinstance(value, str) and value in DEPARTMENTS


def is_valid_employee_id(value: Any) -> bool:
    return isinstance(value, str) and _EMPLOYEE_ID_RE.fullmatch(value) is not None


def is_valid_free_text(value: Any, max_length: int) -> bool:
    """Non-empty, at most ``max_length`` characters, with at least one letter."""
    if not isinstance(value, str) or not value or len(value) > max_length:
        return False
    return _NO_LETTERS_RE.fullmatch(value) is None


def parse_amount(value: Any) -> Decimal | None:
    """Parse a JSON number or numeric string; ``None`` if it is not a finite number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str) and _NUMBER_RE.fullmatch(value) is None:
        # Decimal() also takes "1_000" and non-ASCII digits.
        return None
    if isinstance(value, (int, str)):
        try:
            amount = Decimal(value)
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None
    return None


def _amount_in_range(value: Any, low: Decimal, high: Decimal) -> Decimal | None:
    amount = parse_amount(value)
    if amount is None or amount < low or amount > high:
        return None
    return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


def validate_submission(data: Mapping[str, Any]) -> OffboardingRecord:
    """Check ``data`` against every field rule and return the normalized record.

    Raises:
        InvalidFieldError: for the first rule that fails.
    """
    emp_name = data.get("empName")
    if not is_valid_employee_name(emp_name):
        raise InvalidFieldError("empName", "Invalid employee name")

    position = data.get("position")
    if not is_valid_position(position):
        raise InvalidFieldError("position", "Invalid position")

    department = data.get("department")
    if not is_valid_department(department):
        raise InvalidFieldError("department", "Invalid department")

    emp_id = data.get("empId")
    if not is_valid_employee_id(emp_id):
        raise InvalidFieldError("empId", "Invalid employee ID")

    feedback = data.get("feedback")
    if not is_valid_free_text(feedback, FEEDBACK_MAX_LENGTH):
        raise InvalidFieldError("feedback", "Invalid feedback")

    acknowledgment = data.get("acknowledgment")
    if not is_valid_free_text(acknowledgment, ACKNOWLEDGMENT_MAX_LENGTH):
        raise InvalidFieldError("acknowledgment", "Invalid acknowledgment")

    final_salary = _amount_in_range(data.get("finalSalary"), MIN_FINAL_SALARY, MAX_FINAL_SALARY)
    if final_salary is None:
        raise InvalidFieldError("finalSalary", "Invalid final salary")

    bonus = _amount_in_range(data.get("bonus"), MIN_BONUS, MAX_BONUS)
    if bonus is None:
        raise InvalidFieldError("bonus", "Invalid bonus amount")

    return OffboardingRecord(
        employee_name=emp_name,
        position=position,
        department=department,
        employee_id=emp_id,
        feedback=feedback,
        final_salary=final_salary,
        bonus=bonus,
        acknowledgment=acknowledgment,
    )
