# Base exception class
from .base import StudentRecordsError

# Domain-specific exceptions
from .domain_exceptions import (
    ValidationError,
    ConflictError,
    ConnectionError,
    RetryableError,
    OperationFailedError,
    TableActivationTimeoutError,
)

__all__ = [
    # Base exception
    "StudentRecordsError",
    
    # Domain exceptions (alphabetically ordered)
    "ConflictError",
    "ConnectionError",
    "OperationFailedError",
    "RetryableError",
    "TableActivationTimeoutError",
    "ValidationError",
]
