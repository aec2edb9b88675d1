"""
Tests for TableManager (core/table_manager.py)

The gateway is mocked so every DescribeTable/CreateTable outcome can be
scripted; time.sleep is patched out of the polling loop.
"""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from botocore.exceptions import EndpointConnectionError, NoCredentialsError

from student_records.core.table_manager import TableManager
from student_records.exceptions import (
    ConflictError,
    ConnectionError,
    OperationFailedError,
    RetryableError,
    TableActivationTimeoutError,
)
from student_records.models import TableInfo

ACTIVE = {'TableName': 'test_students-table', 'TableStatus': 'ACTIVE'}
CREATING = {'TableName': 'test_students-table', 'TableStatus': 'CREATING'}
DELETING = {'TableName': 'test_students-table', 'TableStatus': 'DELETING'}
UPDATING = {'TableName': 'test_students-table', 'TableStatus': 'UPDATING'}


@pytest.fixture
def manager(mock_gateway):
    return TableManager(mock_gateway)


@pytest.fixture
def mock_sleep():
    with patch('student_records.core.table_manager.time.sleep') as sleep:
        yield sleep


class TestEnsureExists:

    def test_existing_table_returns_immediately(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.return_value = ACTIVE

        assert manager.ensure_exists() is True
        mock_gateway.create_table.assert_not_called()
        mock_gateway.describe_table.assert_called_once()
        mock_sleep.assert_not_called()

    def test_missing_table_is_created_and_polled(self, manager, mock_gateway, mock_sleep, mock_dynamodb_config):
        mock_gateway.describe_table.side_effect = [None, CREATING, ACTIVE]

        assert manager.ensure_exists() is True

        mock_gateway.create_table.assert_called_once_with(
            key_schema=[{'AttributeName': 'id', 'KeyType': 'HASH'}],
            attribute_definitions=[{'AttributeName': 'id', 'AttributeType': 'S'}],
            read_capacity_units=5,
            write_capacity_units=5,
            tags=[
                {'Key': 'Application', 'Value': 'StudentManagement'},
                {'Key': 'Environment', 'Value': 'test'},
            ]
        )
        assert mock_gateway.describe_table.call_count == 3
        mock_sleep.assert_called_once_with(mock_dynamodb_config.table_wait_interval_seconds)

    def test_second_call_is_a_no_op(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.side_effect = [None, ACTIVE, ACTIVE]

        assert manager.ensure_exists() is True
        assert manager.ensure_exists() is True

        mock_gateway.create_table.assert_called_once()
        assert mock_gateway.describe_table.call_count == 3

    def test_table_being_created_elsewhere_is_awaited(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.side_effect = [CREATING, CREATING, ACTIVE]

        assert manager.ensure_exists() is True
        mock_gateway.create_table.assert_not_called()

    def test_concurrent_create_is_tolerated(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.side_effect = [None, ACTIVE]
        mock_gateway.create_table.side_effect = ConflictError("Resource in use", "test_students-table")

        assert manager.ensure_exists() is True

    def test_describe_errors_while_polling_count_as_not_ready(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.side_effect = [
            None,
            RetryableError("Throttling"),
            ACTIVE,
        ]

        assert manager.ensure_exists() is True
        assert mock_sleep.call_count == 1

    def test_timeout_after_attempt_ceiling(self, manager, mock_gateway, mock_sleep):
        # max attempts is 3 in the test configuration
        mock_gateway.describe_table.side_effect = [None, CREATING, CREATING, CREATING]

        with pytest.raises(TableActivationTimeoutError) as exc_info:
            manager.ensure_exists()

        assert exc_info.value.attempts == 3
        assert exc_info.value.table_name == "test_students-table"
        assert mock_sleep.call_count == 2

    def test_initial_describe_failure_is_wrapped(self, manager, mock_gateway):
        cause = ConnectionError("Authentication/authorization failed")
        mock_gateway.describe_table.side_effect = cause

        with pytest.raises(OperationFailedError, match="Failed to ensure table exists") as exc_info:
            manager.ensure_exists()

        assert exc_info.value.original_error is cause
        assert not isinstance(exc_info.value, TableActivationTimeoutError)

    def test_create_failure_is_wrapped(self, manager, mock_gateway):
        mock_gateway.describe_table.return_value = None
        mock_gateway.create_table.side_effect = ConnectionError("Access denied")

        with pytest.raises(OperationFailedError, match="Failed to ensure table exists: Access denied"):
            manager.ensure_exists()

    def test_updating_table_is_ready(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.return_value = UPDATING

        assert manager.ensure_exists() is True
        mock_gateway.create_table.assert_not_called()
        mock_sleep.assert_not_called()

    def test_deleting_table_is_recreated(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.side_effect = [DELETING, DELETING, None, CREATING, ACTIVE]

        assert manager.ensure_exists() is True

        mock_gateway.create_table.assert_called_once()
        assert mock_gateway.describe_table.call_count == 5

    def test_table_stuck_deleting_fails(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.return_value = DELETING

        with pytest.raises(OperationFailedError, match="still being deleted after 3 attempts") as exc_info:
            manager.ensure_exists()

        assert not isinstance(exc_info.value, TableActivationTimeoutError)
        mock_gateway.create_table.assert_not_called()

    @pytest.mark.parametrize("status", ["ARCHIVED", "INACCESSIBLE_ENCRYPTION_CREDENTIALS"])
    def test_unusable_status_fails(self, manager, mock_gateway, status):
        mock_gateway.describe_table.return_value = {**ACTIVE, 'TableStatus': status}

        with pytest.raises(OperationFailedError, match=f"not usable \\(status {status}\\)"):
            manager.ensure_exists()

        mock_gateway.create_table.assert_not_called()

    def test_transport_error_while_polling_is_retried(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.side_effect = [
            None,
            EndpointConnectionError(endpoint_url="http://localhost:8000"),
            ACTIVE,
        ]

        assert manager.ensure_exists() is True
        assert mock_sleep.call_count == 1

    def test_initial_transport_error_is_wrapped(self, manager, mock_gateway):
        cause = NoCredentialsError()
        mock_gateway.describe_table.side_effect = cause

        with pytest.raises(OperationFailedError, match="Failed to ensure table exists: Unable to locate credentials") as exc_info:
            manager.ensure_exists()

        assert exc_info.value.original_error is cause


class TestWaitUntilActive:

    def test_active_on_first_attempt(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.return_value = ACTIVE

        assert manager.wait_until_active() is True
        mock_sleep.assert_not_called()

    def test_missing_table_is_not_ready(self, manager, mock_gateway, mock_sleep):
        mock_gateway.describe_table.return_value = None

        with pytest.raises(TableActivationTimeoutError):
            manager.wait_until_active()
        assert mock_gateway.describe_table.call_count == 3


class TestDescribeAndList:

    def test_describe(self, manager, mock_gateway):
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)
        mock_gateway.describe_table.return_value = {
            **ACTIVE,
            'ItemCount': 2,
            'TableSizeBytes': 100,
            'CreationDateTime': created,
            'ProvisionedThroughput': {'ReadCapacityUnits': 5, 'WriteCapacityUnits': 5},
        }

        info = manager.describe()

        assert isinstance(info, TableInfo)
        assert info.name == 'test_students-table'
        assert info.status == 'ACTIVE'
        assert info.item_count == 2
        assert info.creation_date == created

    def test_describe_missing_table(self, manager, mock_gateway):
        mock_gateway.describe_table.return_value = None

        assert manager.describe() is None

    def test_describe_failure(self, manager, mock_gateway):
        mock_gateway.describe_table.side_effect = ConnectionError("boom")

        with pytest.raises(OperationFailedError, match="Failed to get table information"):
            manager.describe()

    def test_list_all(self, manager, mock_gateway):
        mock_gateway.list_tables.return_value = ['a', 'test_students-table']

        assert manager.list_all() == ['a', 'test_students-table']

    def test_list_all_failure(self, manager, mock_gateway):
        mock_gateway.list_tables.side_effect = ConnectionError("boom")

        with pytest.raises(OperationFailedError, match="Failed to list tables"):
            manager.list_all()
