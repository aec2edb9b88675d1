"""
Student Record APIs

Read API (queries.py):
- Full-table scans with server-side contains filters
- Point lookups by id

Write API (commands.py):
- Create with generated id and timestamps
- Partial updates over a fixed field set
- Unconditional deletes

StudentService (service.py) composes both over one gateway and table manager.
"""

from .queries import StudentReadApi
from .commands import StudentWriteApi
from .service import StudentService, create_student_service

__all__ = [
    "StudentReadApi",
    "StudentWriteApi",
    "StudentService",
    "create_student_service",
]
