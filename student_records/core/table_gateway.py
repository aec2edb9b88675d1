"""
Thin DynamoDB Table Gateway

One gateway per table. It owns the boto3 session, resource and Table handle
(all created on first use), passes data commands through unchanged, exposes
the few table administration calls the record layer needs, and turns botocore
errors into library exceptions. Deciding what to send is left to the
read/write APIs.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import DynamoDBConfig
from ..exceptions import (
    ConnectionError,
    ConflictError,
    ValidationError,
    RetryableError
)

logger = logging.getLogger(__name__)

# error code -> (exception class, message prefix)
_ERROR_GROUPS = [
    (('ResourceNotFoundException',), ConnectionError, "Table not found"),
    (('ValidationException', 'ItemCollectionSizeLimitExceededException', 'LimitExceededException'),
     ValidationError, "Validation failed"),
    (('ProvisionedThroughputExceededException', 'RequestLimitExceeded',
      'ThrottlingException', 'TooManyRequestsException'),
     RetryableError, "Throttling"),
    (('InternalServerError', 'ServiceUnavailable', 'ServiceUnavailableException', 'RequestTimeoutException'),
     RetryableError, "Service unavailable"),
    (('UnrecognizedClientException', 'AccessDeniedException',
      'InvalidSignatureException', 'IncompleteSignatureException'),
     ConnectionError, "Authentication/authorization failed"),
    (('ExpiredTokenException', 'TokenRefreshRequiredException'), ConnectionError, "Token expired"),
]
ERROR_CODE_MAP = {
    code: (error_class, prefix)
    for codes, error_class, prefix in _ERROR_GROUPS
    for code in codes
}


def map_dynamodb_error(
    error: Union[ClientError, BotoCoreError],
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Translate a botocore error into a library exception.

    Errors raised before DynamoDB answered (BotoCoreError: no endpoint,
    missing credentials, timeouts) become ConnectionError. For ClientError,
    conditional check failures and ResourceInUseException become ConflictError
    (the latter identifies the table). Other known codes are looked up in
    ERROR_CODE_MAP; anything unknown becomes a ConnectionError and is logged.

    Args:
        error: The ClientError or BotoCoreError raised by boto3
        operation: DynamoDB operation name, e.g. "GetItem" or "CreateTable"
        table_name: Table the operation addressed
        resource_id: Item key, when the operation addressed one item

    Returns:
        The exception to raise; the caller chains it with ``from error``
    """
    if not isinstance(error, ClientError):
        return ConnectionError(f"Connection failed - {operation} on {table_name}: {error}", original_error=error)

    details = error.response.get('Error', {})
    error_code = details.get('Code', 'Unknown')

    where = f"{operation} on {table_name}"
    if resource_id:
        where += f" (resource: {resource_id})"
    full_message = f"{where}: {details.get('Message', '')}"

    if error_code == 'ConditionalCheckFailedException':
        return ConflictError(f"Conditional check failed - {full_message}", resource_id, original_error=error)
    if error_code == 'ResourceInUseException':
        return ConflictError(f"Resource in use - {full_message}", resource_id or table_name, original_error=error)

    if error_code in ERROR_CODE_MAP:
        error_class, prefix = ERROR_CODE_MAP[error_code]
        return error_class(f"{prefix} - {full_message}", original_error=error)

    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)


class TableGateway:
    """
    Thin gateway for one DynamoDB table.

    Data operations use the boto3 Table resource. Table administration uses
    the low-level client, since the table may not exist yet.
    """

    def __init__(self, config: DynamoDBConfig, table_name: str):
        self.config = config
        self.table_name = table_name
        self._dynamodb = None
        self._table = None

        if config.enable_debug_logging:
            logging.getLogger('student_records').setLevel(logging.DEBUG)

    def _client_config(self) -> Config:
        timeout = self.config.timeout_seconds
        return Config(
            retries={'max_attempts': self.config.retries},
            max_pool_connections=self.config.max_pool_connections,
            connect_timeout=timeout,
            read_timeout=timeout
        )

    @property
    def dynamodb(self):
        """boto3 DynamoDB service resource, created on first access."""
        if self._dynamodb is not None:
            return self._dynamodb

        try:
            session = boto3.Session(
                aws_access_key_id=self.config.aws_access_key_id,
                aws_secret_access_key=self.config.aws_secret_access_key,
                region_name=self.config.region_name
            )
            resource_kwargs = {'region_name': self.config.region_name, 'config': self._client_config()}
            if self.config.endpoint_url:
                resource_kwargs['endpoint_url'] = self.config.endpoint_url
            self._dynamodb = session.resource('dynamodb', **resource_kwargs)
        except Exception as e:
            logger.error(f"Could not create DynamoDB resource for {self.table_name}: {e}")
            raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e

        return self._dynamodb

    @property
    def client(self):
        """Low-level DynamoDB client sharing the resource's session."""
        return self.dynamodb.meta.client

    @property
    def table(self):
        """boto3 Table handle for table_name."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except ConnectionError:
                raise
            except Exception as e:
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
        return self._table


    # -------------------------------------------------------------------------
    # Data operations
    # -------------------------------------------------------------------------

    def get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Get a single item by primary key.

        Returns:
            The item, or None if no item has this key
        """
        try:
            response = self.table.get_item(Key=key)
            logger.debug(f"GetItem on {self.table_name}: {key}")
            return response.get('Item')
        except (ClientError, BotoCoreError) as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, _key_value(key)) from e

    def put_item(self, item: Dict[str, Any], condition_expression=None) -> None:
        """Write a whole item, replacing any item with the same key."""
        request = _drop_none(Item=item, ConditionExpression=condition_expression)
        try:
            self.table.put_item(**request)
            logger.info(f"Put item in {self.table_name}: {item.get('id')}")
        except (ClientError, BotoCoreError) as e:
            raise map_dynamodb_error(e, "PutItem", self.table_name, item.get('id')) from e

    def update_item(
        self,
        key: Dict[str, Any],
        update_expression: str,
        expression_attribute_values: Optional[Dict[str, Any]] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None,
        condition_expression=None,
        return_values: str = 'NONE'
    ) -> Optional[Dict[str, Any]]:
        """
        Apply an UpdateExpression to one item.

        Args:
            key: Primary key of the item
            update_expression: e.g. ``SET #fullName = :fullName``
            expression_attribute_values: Placeholder values
            expression_attribute_names: Placeholder names
            condition_expression: Condition the item must satisfy
            return_values: DynamoDB ReturnValues option

        Returns:
            The returned attributes, or None when return_values is 'NONE'
        """
        request = _drop_none(
            Key=key,
            UpdateExpression=update_expression,
            ReturnValues=return_values,
            ExpressionAttributeValues=expression_attribute_values or None,
            ExpressionAttributeNames=expression_attribute_names or None,
            ConditionExpression=condition_expression
        )
        try:
            response = self.table.update_item(**request)
        except (ClientError, BotoCoreError) as e:
            raise map_dynamodb_error(e, "UpdateItem", self.table_name, _key_value(key)) from e

        logger.info(f"Updated item in {self.table_name}: {key}")
        return response.get('Attributes') if return_values != 'NONE' else None

    def delete_item(
        self,
        key: Dict[str, Any],
        condition_expression=None,
        return_values: str = 'NONE'
    ) -> Optional[Dict[str, Any]]:
        """Delete one item. Deleting a missing key is not an error."""
        request = _drop_none(Key=key, ReturnValues=return_values, ConditionExpression=condition_expression)
        try:
            response = self.table.delete_item(**request)
        except (ClientError, BotoCoreError) as e:
            raise map_dynamodb_error(e, "DeleteItem", self.table_name, _key_value(key)) from e

        logger.info(f"Deleted item from {self.table_name}: {key}")
        return response.get('Attributes') if return_values != 'NONE' else None

    def scan(self, **kwargs) -> Dict[str, Any]:
        """
        Execute one DynamoDB Scan request.

        Args:
            **kwargs: All boto3 scan parameters

        Returns:
            Raw DynamoDB response (one page)
        """
        try:
            logger.debug(f"Scan on {self.table_name}: {sorted(kwargs)}")
            return self.table.scan(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise map_dynamodb_error(e, "Scan", self.table_name) from e

    def scan_all(self, **kwargs) -> List[Dict[str, Any]]:
        """
        Scan the whole table, following LastEvaluatedKey until exhausted.

        A FilterExpression is applied per page after the read, so a page may
        come back empty while more pages remain.

        Args:
            **kwargs: boto3 scan parameters (ExclusiveStartKey is managed here)

        Returns:
            All matching items across every page
        """
        items: List[Dict[str, Any]] = []
        scan_kwargs = dict(kwargs)
        pages = 0

        while True:
            response = self.scan(**scan_kwargs)
            items.extend(response.get('Items', []))
            pages += 1

            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break
            scan_kwargs['ExclusiveStartKey'] = last_key

        logger.debug(f"Scanned {self.table_name}: {len(items)} items in {pages} page(s)")
        return items

    # -------------------------------------------------------------------------
    # Table administration
    # -------------------------------------------------------------------------

    def describe_table(self) -> Optional[Dict[str, Any]]:
        """
        Describe this gateway's table.

        Returns:
            The ``Table`` element of the DescribeTable response, or None if the
            table does not exist
        """
        try:
            response = self.client.describe_table(TableName=self.table_name)
            return response['Table']
        except (ClientError, BotoCoreError) as e:
            if isinstance(e, ClientError) and e.response['Error']['Code'] == 'ResourceNotFoundException':
                return None
            raise map_dynamodb_error(e, "DescribeTable", self.table_name) from e

    def create_table(
        self,
        key_schema: List[Dict[str, str]],
        attribute_definitions: List[Dict[str, str]],
        read_capacity_units: int,
        write_capacity_units: int,
        tags: Optional[List[Dict[str, str]]] = None
    ) -> Dict[str, Any]:
        """
        Create this gateway's table with provisioned throughput.

        Returns immediately; the table starts in CREATING status.

        Returns:
            The ``TableDescription`` element of the CreateTable response

        Raises:
            ConflictError: The table already exists or is being created
        """
        create_kwargs = {
            'TableName': self.table_name,
            'KeySchema': key_schema,
            'AttributeDefinitions': attribute_definitions,
            'BillingMode': 'PROVISIONED',
            'ProvisionedThroughput': {
                'ReadCapacityUnits': read_capacity_units,
                'WriteCapacityUnits': write_capacity_units
            }
        }
        if tags:
            create_kwargs['Tags'] = tags

        try:
            response = self.client.create_table(**create_kwargs)
            logger.info(f"Requested creation of table {self.table_name}")
            return response['TableDescription']
        except (ClientError, BotoCoreError) as e:
            raise map_dynamodb_error(e, "CreateTable", self.table_name) from e

    def list_tables(self) -> List[str]:
        """
        List every table name in the configured account and region.

        Returns:
            Table names across all ListTables pages
        """
        try:
            names: List[str] = []
            paginator = self.client.get_paginator('list_tables')
            for page in paginator.paginate():
                names.extend(page.get('TableNames', []))
            return names
        except (ClientError, BotoCoreError) as e:
            raise map_dynamodb_error(e, "ListTables", self.table_name) from e


def _drop_none(**request) -> Dict[str, Any]:
    """boto3 rejects None parameters, so optional ones are left out."""
    return {name: value for name, value in request.items() if value is not None}


def _key_value(key: Dict[str, Any]) -> Optional[str]:
    """Partition key value of a single-attribute key, for error context."""
    if len(key) == 1:
        return str(next(iter(key.values())))
    return None


def create_table_gateway(config: DynamoDBConfig, table_name: Optional[str] = None) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: DynamoDB configuration
        table_name: Base table name; defaults to config.students_table

    Returns:
        Configured TableGateway for the prefixed table name
    """
    full_table_name = config.get_table_name(table_name or config.students_table)
    return TableGateway(config, full_table_name)
