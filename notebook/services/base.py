"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, own transactions, and implement
business rules.

Usage:
    from notebook.services.base import BaseService

    class NoteService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.notes = NoteRepository(session)
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notebook.core.exceptions import DatabaseError, ValidationError
from notebook.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Transaction scopes with rollback on failure
    - Error wrapping for database operations
    - Common validation patterns
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    def _translate_db_error(self, operation: str, error: SQLAlchemyError) -> Exception:
        """Map a SQLAlchemy exception to an application exception."""
        if isinstance(error, IntegrityError):
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(error)},
            )
            return DatabaseError(f"Database constraint violation: {operation}")

        self._logger.error(
            "Database error",
            extra={"operation": operation, "error": str(error)},
        )
        return DatabaseError(f"Database operation failed: {operation}")

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
    ) -> T:
        """
        Execute a read-only database operation with error handling.

        Raises:
            DatabaseError: For any database failure
        """
        try:
            return await coro
        except SQLAlchemyError as e:
            raise self._translate_db_error(operation, e) from e

    async def _execute_in_transaction(
        self,
        operation: str,
        work: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Run a unit of work as one transaction.

        The work is committed when it returns and rolled back when anything
        inside it raises, so a multi-statement write is all or nothing.

        Args:
            operation: Description of the operation for logging
            work: Zero-argument coroutine function performing the writes

        Raises:
            DatabaseError: For any database failure
        """
        try:
            result = await work()
            await self._session.commit()
            return result
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise self._translate_db_error(operation, e) from e
        except Exception:
            await self._session.rollback()
            raise

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
    ) -> None:
        """
        Validate that required fields are present and not blank.

        Raises:
            ValidationError: If any required field is missing or empty
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)

        if missing:
            message = " and ".join(missing).capitalize() + " is required"
            raise ValidationError(
                message,
                details={"missing_fields": missing},
            )

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
