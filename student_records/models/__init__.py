# Base mixins and utilities
from .base import (
    DateTimeMixin,
    DynamoDBMixin,
)

# Core domain models
from .domain_models import (
    Student,
    TableMeta,
)

# Read models (views)
from .views import (
    TableInfo,
)

# Write models (DTOs)
from .dtos import (
    StudentCreate,
    StudentUpdate,
)

__all__ = [
    # Base mixins and utilities
    "DateTimeMixin",
    "DynamoDBMixin",
    
    # Domain models
    "Student",
    "TableMeta",
    
    # Read models
    "TableInfo",
    
    # Write models
    "StudentCreate",
    "StudentUpdate",
]
