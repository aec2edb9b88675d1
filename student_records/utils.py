"""
Student Records Utilities

- Timestamps (UTC-only)
- Student id generation
- Expression building for partial updates and substring scans
"""

import logging
import time
from datetime import datetime, timezone
from functools import reduce
from typing import Any, Callable, Dict, List, Optional, Tuple

from boto3.dynamodb.conditions import Attr

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# Timestamps and Ids
# =============================================================================

def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class TimestampIdGenerator:
    """Issues student ids derived from the current epoch time in milliseconds.

    Ids are decimal strings and strictly increase within one generator: when the
    clock has not moved past the last issued value, the last value plus one is
    issued instead. Nothing coordinates ids across processes.

    Example:
        >>> ids = TimestampIdGenerator(clock_ms=lambda: 1700000000000)
        >>> ids(), ids()
        ('1700000000000', '1700000000001')
    """

    def __init__(self, clock_ms: Optional[Callable[[], int]] = None):
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def __call__(self) -> str:
        candidate = self._clock_ms()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)


# =============================================================================
# Expression Building Utilities
# =============================================================================

def build_update_expression(
    fields: Dict[str, Any]
) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    """Build a SET UpdateExpression with attribute names and values.

    Every attribute goes through an expression attribute name so reserved words
    are safe.

    Args:
        fields: Stored attribute names mapped to their new values

    Returns:
        Tuple of (UpdateExpression, ExpressionAttributeNames, ExpressionAttributeValues)

    Example:
        >>> build_update_expression({'fullName': 'B', 'updatedAt': '2024-01-01T00:00:00+00:00'})
        ('SET #fullName = :fullName, #updatedAt = :updatedAt',
         {'#fullName': 'fullName', '#updatedAt': 'updatedAt'},
         {':fullName': 'B', ':updatedAt': '2024-01-01T00:00:00+00:00'})
    """
    if not fields:
        raise ValidationError("Update requires at least one field")

    update_parts = []
    expression_names = {}
    expression_values = {}

    for key, value in fields.items():
        attr_name = f"#{key}"
        attr_value = f":{key}"
        update_parts.append(f"{attr_name} = {attr_value}")
        expression_names[attr_name] = key
        expression_values[attr_value] = value

    return "SET " + ", ".join(update_parts), expression_names, expression_values


def build_contains_filter(attributes: List[str], needle: str):
    """Build a FilterExpression matching items where any attribute contains needle.

    DynamoDB ``contains`` on strings is a case-sensitive substring test.

    Args:
        attributes: Stored attribute names to test
        needle: Substring to look for

    Returns:
        boto3 condition combining one ``contains`` per attribute with OR
    """
    if not attributes:
        raise ValidationError("At least one attribute is required for a contains filter")

    conditions = [Attr(attribute).contains(needle) for attribute in attributes]
    return reduce(lambda left, right: left | right, conditions)
