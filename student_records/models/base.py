"""
Base Model Components and Mixins

Shared behaviour for models that are stored in DynamoDB.

## Attribute naming

Student attributes are stored under their camelCase names (``fullName``,
``phoneNumber``, ``createdAt``) while Python code uses snake_case. Models
declare ``alias_generator=to_camel`` and the mixins below always dump
``by_alias`` so that what reaches the table matches what is already there.

## Components

- DateTimeMixin: parses ISO-8601 strings (including the ``Z`` suffix written by
  JavaScript's ``toISOString()``) and normalizes naive datetimes to UTC
- DynamoDBMixin: to_dynamodb_item() / from_dynamodb_item()
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, field_validator
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


class DateTimeMixin(BaseModel):
    """
    Validation for the ``created_at`` / ``updated_at`` fields of a model.

    Stored timestamps are UTC. A naive value is taken to be UTC already; an
    aware one is converted.
    """

    @field_validator('created_at', 'updated_at', mode='before', check_fields=False)
    @classmethod
    def validate_datetime_fields(cls, v):
        if v is None:
            return v

        if isinstance(v, str):
            try:
                v = datetime.fromisoformat(v.replace('Z', '+00:00'))
            except ValueError as e:
                raise ValueError(f"Invalid datetime format: {v}. Expected ISO format.") from e

        if not isinstance(v, datetime):
            raise ValueError(f"Invalid datetime type: {type(v)}. Expected datetime object or ISO string.")

        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


def _to_attribute_value(value: Any) -> Any:
    """Python value -> something boto3's TypeSerializer accepts."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_attribute_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_attribute_value(v) for v in value]
    return value


class DynamoDBMixin(BaseModel):
    """
    Conversion between a model and a DynamoDB item.

    Items are keyed by the stored (alias) attribute names, datetimes are
    written as ISO strings and None fields are left out of the item.
    """

    def to_dynamodb_item(self) -> Dict[str, Any]:
        """
        Item ready for ``put_item``.

        Example:
            gateway.put_item(student.to_dynamodb_item())
        """
        return _to_attribute_value(self.model_dump(exclude_none=True, by_alias=True))

    @classmethod
    def from_dynamodb_item(cls, item: Dict[str, Any]):
        """
        Build a model from an item read from the table.

        Raises:
            ValidationError: The item does not fit the model
        """
        from ..exceptions import ValidationError

        try:
            return cls.model_validate(item)
        except PydanticValidationError as e:
            logger.error(f"Failed to convert DynamoDB item to {cls.__name__}: {e}")
            raise ValidationError(
                f"Failed to convert DynamoDB item to {cls.__name__}: {e.error_count()} error(s)",
                original_error=e
            ) from e
