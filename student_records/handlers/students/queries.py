"""
Student Read API

Read operations for student records. There are no secondary indexes on the
students table, so every filtered read is a full Scan with a server-side
``contains`` FilterExpression. Results come back in whatever order DynamoDB
returns them.

Every public method first makes sure the table exists.
"""

import logging
from typing import Any, Dict, List, Optional

from ...config import DynamoDBConfig
from ...core import TableGateway, TableManager, create_table_gateway
from ...exceptions import OperationFailedError
from ...models import Student
from ...utils import build_contains_filter

logger = logging.getLogger(__name__)

# Fields matched by the free-text search
SEARCH_FIELDS = ['full_name', 'email', 'phone_number']


class StudentReadApi:
    """
    Read-only API for student records.
    """

    def __init__(
        self,
        config: DynamoDBConfig,
        gateway: Optional[TableGateway] = None,
        table_manager: Optional[TableManager] = None
    ):
        """Initialize read API with configuration.

        Args:
            config: DynamoDB configuration
            gateway: Gateway to reuse (created from config if omitted)
            table_manager: Table manager to reuse (created for the gateway if omitted)
        """
        self.config = config
        self.gateway = gateway or create_table_gateway(config)
        self.table_manager = table_manager or TableManager(self.gateway)

    def get_all(self) -> List[Student]:
        """
        Return every student.

        DynamoDB Operation: Scan (all pages)

        Raises:
            OperationFailedError: "Failed to fetch students"
        """
        self.table_manager.ensure_exists()

        try:
            items = self.gateway.scan_all()
            return self._to_students(items)
        except Exception as e:
            logger.error(f"Error fetching students: {e}")
            raise OperationFailedError("Failed to fetch students", "GetAllStudents", e) from e

    def get_by_id(self, student_id: str) -> Optional[Student]:
        """
        Get one student by id.

        DynamoDB Operation: GetItem

        Returns:
            The student, or None if no student has this id

        Raises:
            OperationFailedError: "Failed to fetch student"
        """
        self.table_manager.ensure_exists()

        try:
            item = self.gateway.get_item(Student.Meta.build_key(student_id))
            if item is None:
                return None
            return Student.from_dynamodb_item(item)
        except Exception as e:
            logger.error(f"Error fetching student {student_id}: {e}")
            raise OperationFailedError("Failed to fetch student", "GetStudent", e) from e

    def search(self, query: Optional[str]) -> List[Student]:
        """
        Find students whose full name, email or phone number contains query.

        A blank query returns every student. The query is lowercased before
        matching while stored values are compared as they are, so a query only
        matches the lowercase parts of stored values.

        DynamoDB Operation: Scan with FilterExpression

        Raises:
            OperationFailedError: "Failed to search students"
        """
        if not query or not query.strip():
            return self.get_all()

        self.table_manager.ensure_exists()

        attributes = [Student.attribute_name(field) for field in SEARCH_FIELDS]
        return self._scan_filtered(
            build_contains_filter(attributes, query.lower()),
            "Failed to search students",
            "SearchStudents"
        )

    def search_by_address(self, address_query: str) -> List[Student]:
        """
        Find students whose address contains address_query (case-sensitive).

        Raises:
            OperationFailedError: "Failed to fetch students by address"
        """
        self.table_manager.ensure_exists()

        return self._scan_filtered(
            build_contains_filter([Student.attribute_name('address')], address_query),
            "Failed to fetch students by address",
            "SearchStudentsByAddress"
        )

    def search_by_email_domain(self, domain: str) -> List[Student]:
        """
        Find students whose email contains domain (case-sensitive).

        Raises:
            OperationFailedError: "Failed to fetch students by email domain"
        """
        self.table_manager.ensure_exists()

        return self._scan_filtered(
            build_contains_filter([Student.attribute_name('email')], domain),
            "Failed to fetch students by email domain",
            "SearchStudentsByEmailDomain"
        )

    def _scan_filtered(self, filter_expression, failure_message: str, operation: str) -> List[Student]:
        try:
            items = self.gateway.scan_all(FilterExpression=filter_expression)
            return self._to_students(items)
        except Exception as e:
            logger.error(f"Error in {operation}: {e}")
            raise OperationFailedError(failure_message, operation, e) from e

    @staticmethod
    def _to_students(items: List[Dict[str, Any]]) -> List[Student]:
        return [Student.from_dynamodb_item(item) for item in items]
