"""Domain exceptions for the message search layer.

Expected empty conditions (blank query, missing contact permission, a
collaborator reporting no rows) are not exceptions; they resolve to empty
results. The classes here cover row-shape violations and resource failures.
Presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class MessageSearchException(Exception):
    """Base exception for all message search errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. column, position).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(MessageSearchException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class RowSourceError(MessageSearchException):
    """Raised when a row source cannot be opened, counted or positioned.

    The aggregator treats this as a failure of one data-source branch and
    substitutes an empty list for it.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        """Initialize with message and optional source description.

        Args:
            message: Description of the failure.
            source: Optional name of the row source (e.g. 'messages').
        """
        details = {"source": source} if source else {}
        super().__init__(message, "ROW_SOURCE_ERROR", details)


class MissingColumnError(MessageSearchException):
    """Raised when a required column is absent from a row.

    Signals that the row shape contract was broken upstream. Never retried
    and never replaced by a default value.
    """

    def __init__(self, column: str, available: tuple[str, ...] = ()) -> None:
        """Initialize with the missing column name.

        Args:
            column: The required column that was not found.
            available: Column names the row actually carries.
        """
        super().__init__(
            f"Required column missing from row: {column}",
            "ROW_SHAPE_ERROR",
            {"column": column, "available": list(available)},
        )
        self.column = column


class ResultListClosedError(MessageSearchException):
    """Raised when elements are read from a result list after it was closed."""

    def __init__(self) -> None:
        super().__init__(
            "Result list has been closed; its row source is released",
            "RESULT_LIST_CLOSED",
        )
