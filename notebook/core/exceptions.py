"""
Application Exceptions.

Raised by services; exception_handlers maps each one to an HTTP status.
"""

from typing import Any


class ApplicationError(Exception):
    """Base class. `code` is the machine-readable error code sent to clients."""

    code = "SYS_INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(ApplicationError):
    """A request is well-formed but its values are unusable, e.g. blank note content."""

    code = "VAL_VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}


class DatabaseError(ApplicationError):
    """The database failed or rejected a statement."""

    code = "SYS_DATABASE_ERROR"

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message)
