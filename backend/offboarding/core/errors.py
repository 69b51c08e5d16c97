"""Error taxonomy for the offboarding service.

Every error a request can end in is an ``OffboardingError`` carrying the HTTP
status and the client-facing message. Infrastructure details stay in the logs.
"""

from __future__ import annotations

INTERNAL_ERROR_MESSAGE = "Internal server error"


class OffboardingError(Exception):
    status_code: int = 500

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class InvalidFieldError(OffboardingError):
    """A submitted field failed its acceptance rule."""

    status_code = 400

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class DuplicateKeyError(OffboardingError):
    """The employee ID has already been submitted."""

    status_code = 409

    def __init__(self, employee_id: str) -> None:
        super().__init__("Employee ID already exists")
        self.employee_id = employee_id


class StoreUnavailableError(OffboardingError):
    """The database could not be reached or did not answer in time."""

    status_code = 500


class StartupError(Exception):
    """The store stayed unreachable for every startup attempt."""
