"""
Handler Layer for Student Records

Application-layer handlers following Command Query Responsibility
Segregation (CQRS):

- students/queries.py: read operations
- students/commands.py: write operations
- students/service.py: one handle combining both

Architecture:
handlers/ (this layer) -> core/ (infrastructure) -> DynamoDB
handlers/ (this layer) <- models/ (domain models)
"""

from .students import (
    StudentReadApi,
    StudentService,
    StudentWriteApi,
    create_student_service,
)

__all__ = [
    'StudentReadApi',
    'StudentWriteApi',
    'StudentService',
    'create_student_service',
]
