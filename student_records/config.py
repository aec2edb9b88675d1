"""
Configuration for the student records library.

Every setting can come from the environment (a ``.env`` file in the working
directory is loaded on import) or be passed explicitly:

    AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY   credentials (else the boto3 chain)
    AWS_REGION                                  region, default us-east-1
    DYNAMODB_ENDPOINT_URL                       e.g. http://localhost:8000
    DYNAMODB_TABLE_PREFIX                       optional table name prefix
    STUDENTS_TABLE                              base table name, default students-table
    STUDENTS_READ_CAPACITY / _WRITE_CAPACITY    throughput for a newly created table
    TABLE_WAIT_MAX_ATTEMPTS / _INTERVAL_SECONDS polling while a table activates
    ENVIRONMENT                                 dev | test | staging | prod
    DYNAMODB_DEBUG_LOGGING                      "true" turns on debug logs
"""

import os
from typing import Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()

ENVIRONMENTS = ('dev', 'test', 'staging', 'prod')


def _env(name: str, default: Optional[str] = None, cast: Callable = str) -> Callable:
    """Default factory reading name from the environment at construction time."""
    def factory():
        value = os.getenv(name)
        if value is None:
            return cast(default) if default is not None else None
        return cast(value)
    return factory


def _flag(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes')


class DynamoDBConfig(BaseModel):
    """Connection, naming and provisioning settings for the students table."""

    # Credentials and endpoint
    aws_access_key_id: Optional[str] = Field(default_factory=_env("AWS_ACCESS_KEY_ID"))
    aws_secret_access_key: Optional[str] = Field(default_factory=_env("AWS_SECRET_ACCESS_KEY"))
    region_name: str = Field(default_factory=_env("AWS_REGION", "us-east-1"))
    endpoint_url: Optional[str] = Field(
        default_factory=_env("DYNAMODB_ENDPOINT_URL"),
        description="Override for DynamoDB Local or LocalStack"
    )

    # Naming
    table_prefix: str = Field(default_factory=_env("DYNAMODB_TABLE_PREFIX", ""))
    students_table: str = Field(default_factory=_env("STUDENTS_TABLE", "students-table"))
    environment: str = Field(default_factory=_env("ENVIRONMENT", "dev"))

    # Provisioning of a missing table
    read_capacity_units: int = Field(default_factory=_env("STUDENTS_READ_CAPACITY", "5", int), ge=1)
    write_capacity_units: int = Field(default_factory=_env("STUDENTS_WRITE_CAPACITY", "5", int), ge=1)
    table_wait_max_attempts: int = Field(
        default_factory=_env("TABLE_WAIT_MAX_ATTEMPTS", "30", int),
        ge=1,
        description="DescribeTable attempts before giving up on a table becoming ACTIVE"
    )
    table_wait_interval_seconds: float = Field(
        default_factory=_env("TABLE_WAIT_INTERVAL_SECONDS", "1", float),
        ge=0.0,
        description="Sleep between DescribeTable attempts"
    )

    # botocore client
    max_pool_connections: int = Field(default=50, ge=1)
    retries: int = Field(default=3, ge=0, description="botocore max_attempts")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Connect and read timeout")

    enable_debug_logging: bool = Field(default_factory=_env("DYNAMODB_DEBUG_LOGGING", "false", _flag))

    model_config = ConfigDict(validate_assignment=True)

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('students_table')
    @classmethod
    def validate_students_table(cls, v):
        v = v.strip() if v else v
        if not v:
            raise ValueError("Students table name is required")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        if v not in ENVIRONMENTS:
            raise ValueError(f"Environment must be one of: {list(ENVIRONMENTS)}")
        return v

    def get_table_name(self, base_name: str) -> str:
        """Physical table name: ``[prefix_][environment_]base_name``.

        The environment segment is left out in prod.
        """
        parts = [self.table_prefix] if self.table_prefix else []
        if self.environment != 'prod':
            parts.append(self.environment)
        parts.append(base_name)
        return "_".join(parts)

    @property
    def students_table_name(self) -> str:
        return self.get_table_name(self.students_table)

    @classmethod
    def from_env(cls) -> 'DynamoDBConfig':
        """Build the configuration purely from environment variables."""
        return cls()

    @classmethod
    def for_local_development(cls, endpoint_url: str = "http://localhost:8000") -> 'DynamoDBConfig':
        """Configuration for DynamoDB Local with dummy credentials and debug logs."""
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url=endpoint_url,
            environment="dev",
            enable_debug_logging=True
        )
