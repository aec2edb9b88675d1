"""
Table Lifecycle Manager

Lazily provisions the students table and reports on it.

``ensure_exists()`` is idempotent: it returns at once when the table is already
there, creates it when it is missing, and polls DescribeTable until the table
is ACTIVE. When two callers race to create the table, the loser gets
ResourceInUseException from CreateTable and simply polls as well.
"""

import logging
import time
from typing import Callable, List, Optional, Type

from ..exceptions import (
    ConflictError,
    OperationFailedError,
    StudentRecordsError,
    TableActivationTimeoutError,
)
from ..models import Student, TableInfo, TableMeta
from .table_gateway import TableGateway

logger = logging.getLogger(__name__)

APPLICATION_TAG = "StudentManagement"

# Statuses in which the table serves reads and writes
READY_STATUSES = ("ACTIVE", "UPDATING")


class TableManager:
    """Creates, waits for and describes the table behind a gateway."""

    def __init__(self, gateway: TableGateway, meta: Type[TableMeta] = Student.Meta):
        """Initialize the manager.

        Args:
            gateway: Gateway for the table to manage
            meta: Key definition used when the table has to be created
        """
        self.gateway = gateway
        self.config = gateway.config
        self.meta = meta

    @property
    def table_name(self) -> str:
        return self.gateway.table_name

    def ensure_exists(self) -> bool:
        """
        Make sure the table exists and is usable, creating it if needed.

        ACTIVE and UPDATING tables are ready as they are. A CREATING table is
        polled until ACTIVE. A DELETING table is polled until it is gone and
        then created again.

        Returns:
            True once the table is ready

        Raises:
            TableActivationTimeoutError: The table never reached ACTIVE
            OperationFailedError: Any other failure while checking or creating
        """
        try:
            table = self.gateway.describe_table()
            status = table['TableStatus'] if table else None

            if status in READY_STATUSES:
                logger.debug(f"Table {self.table_name} already exists ({status})")
                return True

            if status == 'CREATING':
                logger.info(f"Table {self.table_name} is being created elsewhere, waiting for it")
                return self.wait_until_active()

            if status == 'DELETING':
                logger.info(f"Table {self.table_name} is being deleted, waiting to recreate it")
                self.wait_until_deleted()
            elif status is not None:
                raise OperationFailedError(f"Table {self.table_name} is not usable (status {status})")

            self._create()
            self.wait_until_active()
            logger.info(f"Table {self.table_name} created successfully")
            return True

        except TableActivationTimeoutError:
            raise
        except Exception as e:
            logger.error(f"Error ensuring table {self.table_name} exists: {e}")
            raise OperationFailedError(
                f"Failed to ensure table exists: {_detail(e)}", "EnsureTableExists", e
            ) from e

    def wait_until_active(self) -> bool:
        """
        Poll DescribeTable until the table is ACTIVE.

        Errors while describing count as "not ready yet" and use up an attempt.

        Returns:
            True when the table is ACTIVE

        Raises:
            TableActivationTimeoutError: After table_wait_max_attempts attempts
        """
        if self._poll(lambda table: table is not None and table['TableStatus'] == 'ACTIVE'):
            logger.info(f"Table {self.table_name} is now active")
            return True
        raise TableActivationTimeoutError(
            self.table_name, self.config.table_wait_max_attempts, self.config.table_wait_interval_seconds
        )

    def wait_until_deleted(self) -> bool:
        """
        Poll DescribeTable until the table no longer exists.

        Raises:
            OperationFailedError: The table still exists after table_wait_max_attempts attempts
        """
        if self._poll(lambda table: table is None):
            logger.info(f"Table {self.table_name} is gone")
            return True
        raise OperationFailedError(
            f"Table {self.table_name} was still being deleted after "
            f"{self.config.table_wait_max_attempts} attempts",
            "WaitForTableDeleted"
        )

    def _poll(self, done: Callable[[Optional[dict]], bool]) -> bool:
        max_attempts = self.config.table_wait_max_attempts
        interval = self.config.table_wait_interval_seconds

        for attempt in range(1, max_attempts + 1):
            try:
                table = self.gateway.describe_table()
                if done(table):
                    return True
                status = table['TableStatus'] if table else None
                logger.debug(f"Table {self.table_name} status {status} (attempt {attempt}/{max_attempts})")
            except Exception as e:
                logger.warning(f"Error checking status of table {self.table_name}: {e}")

            if attempt < max_attempts:
                time.sleep(interval)

        return False

    def _create(self) -> None:
        logger.info(f"Creating table {self.table_name}...")
        try:
            self.gateway.create_table(
                key_schema=self.meta.key_schema(),
                attribute_definitions=self.meta.attribute_definitions(),
                read_capacity_units=self.config.read_capacity_units,
                write_capacity_units=self.config.write_capacity_units,
                tags=self._tags()
            )
        except ConflictError:
            logger.warning(f"Table {self.table_name} was created concurrently, waiting for it")

    def describe(self) -> Optional[TableInfo]:
        """
        Describe the table.

        Returns:
            TableInfo, or None if the table does not exist

        Raises:
            OperationFailedError: DescribeTable failed for a reason other than absence
        """
        try:
            table = self.gateway.describe_table()
        except Exception as e:
            logger.error(f"Error getting table info for {self.table_name}: {e}")
            raise OperationFailedError("Failed to get table information", "DescribeTable", e) from e

        if table is None:
            return None
        return TableInfo.from_description(table)

    def list_all(self) -> List[str]:
        """
        List every table name visible to the configured credentials.

        Raises:
            OperationFailedError: ListTables failed
        """
        try:
            return self.gateway.list_tables()
        except Exception as e:
            logger.error(f"Error listing tables: {e}")
            raise OperationFailedError("Failed to list tables", "ListTables", e) from e

    def _tags(self) -> List[dict]:
        return [
            {'Key': 'Application', 'Value': APPLICATION_TAG},
            {'Key': 'Environment', 'Value': self.config.environment},
        ]


def _detail(error: Exception) -> str:
    if isinstance(error, StudentRecordsError):
        return error.message
    return str(error) or type(error).__name__
