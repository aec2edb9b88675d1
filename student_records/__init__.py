"""
Student Records

Student record management on AWS DynamoDB, built on boto3 and Pydantic:
lazy, idempotent provisioning of the students table plus create, read,
update, delete and substring search over student records.
"""

from .config import DynamoDBConfig
from .exceptions import (
    ConflictError,
    ConnectionError,
    OperationFailedError,
    RetryableError,
    StudentRecordsError,
    TableActivationTimeoutError,
    ValidationError,
)
from .models import (
    Student,
    StudentCreate,
    StudentUpdate,
    TableInfo,
)
from .core import (
    TableGateway,
    TableManager,
    create_table_gateway,
)
from .handlers import (
    StudentReadApi,
    StudentWriteApi,
    StudentService,
    create_student_service,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",
    
    # Exceptions
    "ConflictError",
    "ConnectionError",
    "OperationFailedError",
    "RetryableError",
    "StudentRecordsError",
    "TableActivationTimeoutError",
    "ValidationError",
    
    # Models
    "Student",
    "StudentCreate",
    "StudentUpdate",
    "TableInfo",
    
    # Infrastructure
    "TableGateway",
    "TableManager",
    "create_table_gateway",
    
    # APIs
    "StudentReadApi",
    "StudentWriteApi",
    "StudentService",
    "create_student_service",
]
