"""
Write-Optimized DTOs for Student Records

Input models for create and update. Both accept snake_case field names or the
stored camelCase names, strip surrounding whitespace, and reject unknown
fields.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+$'

_DTO_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    str_strip_whitespace=True,
    extra='forbid'
)


class StudentCreate(BaseModel):
    """
    DTO for creating a student. Every field is required.
    """
    
    full_name: str = Field(..., min_length=1, max_length=256, description="Student's full name")
    address: str = Field(..., min_length=1, max_length=512, description="Postal address")
    email: str = Field(..., min_length=3, max_length=320, pattern=EMAIL_PATTERN, description="Email address")
    phone_number: str = Field(..., min_length=1, max_length=64, description="Phone number")

    model_config = _DTO_CONFIG


class StudentUpdate(BaseModel):
    """
    DTO for a partial student update.

    Only fields that are supplied and not None are written; ``id`` is not
    updatable and timestamps are managed by the write API.
    """

    full_name: Optional[str] = Field(None, min_length=1, max_length=256, description="Student's full name")
    address: Optional[str] = Field(None, min_length=1, max_length=512, description="Postal address")
    email: Optional[str] = Field(None, min_length=3, max_length=320, pattern=EMAIL_PATTERN, description="Email address")
    phone_number: Optional[str] = Field(None, min_length=1, max_length=64, description="Phone number")

    model_config = _DTO_CONFIG

    def provided_fields(self) -> Dict[str, Any]:
        """Fields to write, keyed by stored attribute name."""
        return self.model_dump(exclude_none=True, by_alias=True)
