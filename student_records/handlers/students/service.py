"""
Student Service

Single handle over the students table: one gateway, one table manager, and the
read and write APIs built on them. Construct it once (at process start or in a
test fixture) and pass it to whatever needs student records.

Usage:
    service = create_student_service(DynamoDBConfig.from_env())
    student = service.create({"fullName": "Ada", "address": "1 Main St",
                              "email": "ada@example.com", "phoneNumber": "555"})
    service.search("ada")
"""

import logging
from typing import Any, Dict, List, Optional, Union

from ...config import DynamoDBConfig
from ...core import TableGateway, TableManager, create_table_gateway
from ...models import Student, StudentCreate, StudentUpdate, TableInfo
from .commands import StudentWriteApi
from .queries import StudentReadApi

logger = logging.getLogger(__name__)


class StudentService:
    """
    Facade over StudentReadApi and StudentWriteApi sharing one table.
    """

    def __init__(
        self,
        config: DynamoDBConfig,
        gateway: Optional[TableGateway] = None,
        table_manager: Optional[TableManager] = None,
        read_api: Optional[StudentReadApi] = None,
        write_api: Optional[StudentWriteApi] = None
    ):
        self.config = config
        self.gateway = gateway or create_table_gateway(config)
        self.table_manager = table_manager or TableManager(self.gateway)
        self.read_api = read_api or StudentReadApi(config, self.gateway, self.table_manager)
        self.write_api = write_api or StudentWriteApi(config, self.gateway, self.table_manager)

    @property
    def table_name(self) -> str:
        return self.gateway.table_name

    # Table lifecycle

    def ensure_table_exists(self) -> bool:
        return self.table_manager.ensure_exists()

    def describe_table(self) -> Optional[TableInfo]:
        return self.table_manager.describe()

    def list_tables(self) -> List[str]:
        return self.table_manager.list_all()

    # Commands

    def create(self, data: Union[StudentCreate, Dict[str, Any]]) -> Student:
        return self.write_api.create(data)

    def update(self, student_id: str, data: Union[StudentUpdate, Dict[str, Any]]) -> Optional[Student]:
        return self.write_api.update(student_id, data)

    def delete(self, student_id: str) -> str:
        return self.write_api.delete(student_id)

    # Queries

    def get_all(self) -> List[Student]:
        return self.read_api.get_all()

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self.read_api.get_by_id(student_id)

    def search(self, query: Optional[str]) -> List[Student]:
        return self.read_api.search(query)

    def search_by_address(self, address_query: str) -> List[Student]:
        return self.read_api.search_by_address(address_query)

    def search_by_email_domain(self, domain: str) -> List[Student]:
        return self.read_api.search_by_email_domain(domain)


def create_student_service(config: Optional[DynamoDBConfig] = None) -> StudentService:
    """
    Build a StudentService for the configured students table.

    Args:
        config: DynamoDB configuration (read from the environment if omitted)
    """
    config = config or DynamoDBConfig.from_env()
    service = StudentService(config)
    logger.debug(f"Student service bound to table {service.table_name}")
    return service
