"""Typed failures raised by the loan management services."""

from typing import List, Optional


class LoanManagementError(Exception):
    """Base class for every failure the services report to the transport."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LoanManagementError):
    """Referenced user or loan does not exist (or is not owned by the caller)."""


class UnauthorizedError(LoanManagementError):
    """Role mismatch, ownership mismatch or blocked account."""


class InvalidOperationError(LoanManagementError):
    """Requested transition is not allowed from the current state."""


class AlreadyExistsError(LoanManagementError):
    """Unique e-mail or username is already taken."""


class ValidationFailedError(LoanManagementError):
    """Malformed input payload."""

    def __init__(self, errors: List[str], message: Optional[str] = None):
        super().__init__(message or "Validation failed.")
        self.errors = errors
