"""
Domain exceptions for student records.

Gateway-level errors (ValidationError, ConflictError, ConnectionError,
RetryableError) say what DynamoDB or the input rejected. OperationFailedError
is what callers of the record layer see when a whole operation gives up; the
gateway error that caused it is kept in ``original_error``.
"""

from typing import Any, Dict, Optional

from .base import StudentRecordsError


def _non_empty(**fields) -> Dict[str, Any]:
    return {name: value for name, value in fields.items() if value}


class ValidationError(StudentRecordsError):
    """Input or stored data failed validation.

    Raised for create/update payloads that do not fit the DTOs, stored items
    that cannot be read back as a Student, and DynamoDB ValidationException.
    ``errors`` maps field paths to messages when they are known.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None,
                 original_error: Optional[Exception] = None):
        self.errors = errors or {}
        super().__init__(message, original_error, _non_empty(validation_errors=self.errors))


class ConflictError(StudentRecordsError):
    """A condition failed (ConditionalCheckFailedException) or the resource is
    busy (ResourceInUseException while a table is being created)."""

    def __init__(self, message: str, resource_id: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        self.resource_id = resource_id
        super().__init__(message, original_error, _non_empty(resource_id=resource_id))


class ConnectionError(StudentRecordsError):
    """DynamoDB could not be reached or refused the caller.

    Also used for a missing table on a data operation and for error codes the
    gateway does not recognise.
    """


class RetryableError(StudentRecordsError):
    """Throttling or a transient service failure; the same call may succeed later."""


class OperationFailedError(StudentRecordsError):
    """A record-layer operation could not be completed.

    The message is fixed per operation ("Failed to create student",
    "Failed to fetch students", ...) and str(error) is exactly that message, so
    it can be shown to a user as-is. The failed operation is kept in
    ``operation`` rather than in the rendered context.
    """

    def __init__(self, message: str, operation: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        self.operation = operation
        super().__init__(message, original_error)


class TableActivationTimeoutError(OperationFailedError):
    """The table did not reach ACTIVE within the polling ceiling."""

    def __init__(self, table_name: str, attempts: int, interval_seconds: float):
        self.table_name = table_name
        self.attempts = attempts
        self.interval_seconds = interval_seconds
        super().__init__(
            f"Table {table_name} did not become active within "
            f"{attempts} attempts ({attempts * interval_seconds:g} seconds)",
            operation="WaitForTableActive"
        )
