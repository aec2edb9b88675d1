"""
Core infrastructure components for DynamoDB operations.

- TableGateway: Thin wrapper over boto3 DynamoDB operations for one table
- TableManager: Idempotent provisioning and description of that table
- Factory functions for creating gateways
"""

from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error
from .table_manager import TableManager

__all__ = [
    "TableGateway",
    "TableManager",
    "create_table_gateway",
    "map_dynamodb_error",
]
