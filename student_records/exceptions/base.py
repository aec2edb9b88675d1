"""
Root of the student records exception hierarchy.

Callers that only care whether a call failed catch StudentRecordsError; the
subclasses in domain_exceptions say how it failed.
"""

from typing import Any, Dict, Optional


class StudentRecordsError(Exception):
    """Base exception for the student records library.

    Attributes:
        message: What went wrong, without context
        original_error: Lower-level exception (a botocore ClientError, a mapped
            library error, a pydantic error) this one was raised from
        context: Extra key/value detail appended to str(error)
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = dict(context) if context else {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (Context: {details})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"original_error={self.original_error!r}, context={self.context!r})"
        )
