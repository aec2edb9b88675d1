"""
Domain Models for Student Records

The Student entity and the metadata describing the table it lives in.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import DateTimeMixin, DynamoDBMixin


# =============================================================================
# DynamoDB Table Metadata Classes
# =============================================================================

class TableMeta:
    """Base class for table metadata definitions."""
    table_name: str
    partition_key: str
    partition_key_type: str = "S"
    
    @classmethod
    def build_key(cls, value: str) -> dict:
        """Build the item key for a partition key value."""
        return {cls.partition_key: value}

    @classmethod
    def key_schema(cls) -> List[dict]:
        return [{'AttributeName': cls.partition_key, 'KeyType': 'HASH'}]

    @classmethod
    def attribute_definitions(cls) -> List[dict]:
        return [{'AttributeName': cls.partition_key, 'AttributeType': cls.partition_key_type}]


# =============================================================================
# Student Domain
# =============================================================================

class Student(DynamoDBMixin, DateTimeMixin, BaseModel):
    """
    A stored student record.

    Stored attribute names are camelCase (``fullName``, ``phoneNumber``,
    ``createdAt``, ``updatedAt``). The mutable fields are optional here because
    records written by other clients are not guaranteed to carry all of them;
    StudentCreate enforces them for records created through this library.
    """

    id: str = Field(..., min_length=1, description="Partition key, assigned at creation")
    full_name: Optional[str] = Field(None, description="Student's full name")
    address: Optional[str] = Field(None, description="Postal address")
    email: Optional[str] = Field(None, description="Email address")
    phone_number: Optional[str] = Field(None, description="Phone number")

    # Timestamps - datetime validation handled by DateTimeMixin
    created_at: Optional[datetime] = Field(None, description="Creation timestamp (UTC)")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp (UTC)")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True
    )

    @classmethod
    def attribute_name(cls, field_name: str) -> str:
        """Stored attribute name for a model field (``full_name`` -> ``fullName``)."""
        return cls.model_fields[field_name].alias or field_name

    class Meta(TableMeta):
        table_name = "students"
        partition_key = "id"
        partition_key_type = "S"
