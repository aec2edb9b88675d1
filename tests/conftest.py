"""
Test configuration and fixtures for the student records library.

Provides configuration, an in-memory DynamoDB (moto) and service fixtures.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
from moto import mock_aws

from student_records import (
    DynamoDBConfig,
    StudentService,
    StudentWriteApi,
    TableManager,
    create_table_gateway,
)


class TickingClock:
    """Clock returning a strictly increasing UTC time on every call."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so nothing can reach a real AWS account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def mock_dynamodb_config():
    """DynamoDB configuration for mocked testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        environment="test",
        table_prefix="",
        students_table="students-table",
        table_wait_max_attempts=3,
        table_wait_interval_seconds=0.0
    )


@pytest.fixture
def mock_aws_env(aws_credentials):
    """Active moto mock for the duration of a test."""
    with mock_aws():
        yield


@pytest.fixture
def ticking_clock():
    return TickingClock()


@pytest.fixture
def student_service(mock_aws_env, mock_dynamodb_config, ticking_clock):
    """StudentService over an in-memory DynamoDB; the table is not created yet."""
    gateway = create_table_gateway(mock_dynamodb_config)
    table_manager = TableManager(gateway)
    write_api = StudentWriteApi(mock_dynamodb_config, gateway, table_manager, clock=ticking_clock)
    return StudentService(mock_dynamodb_config, gateway, table_manager, write_api=write_api)


@pytest.fixture
def mock_gateway(mock_dynamodb_config):
    """Mock table gateway for handler unit tests."""
    gateway = Mock()
    gateway.config = mock_dynamodb_config
    gateway.table_name = "test_students-table"
    return gateway


@pytest.fixture
def mock_table_manager():
    """Table manager whose table always exists."""
    manager = Mock()
    manager.ensure_exists.return_value = True
    return manager


# Sample Data Fixtures

@pytest.fixture
def sample_student_data():
    """Sample student payload as the UI sends it (stored attribute names)."""
    return {
        "fullName": "Ada Lovelace",
        "address": "12 St James's Square, London",
        "email": "ada@analytical.org",
        "phoneNumber": "555-0100"
    }


@pytest.fixture
def sample_student_item():
    """A student as stored in DynamoDB."""
    return {
        "id": "1700000000000",
        "fullName": "Ada Lovelace",
        "address": "12 St James's Square, London",
        "email": "ada@analytical.org",
        "phoneNumber": "555-0100",
        "createdAt": "2024-01-01T10:00:00.000Z",
        "updatedAt": "2024-01-01T10:00:00.000Z"
    }
