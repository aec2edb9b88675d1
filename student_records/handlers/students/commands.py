"""
Student Write API

Create, update and delete operations for student records.

- create: unconditional PutItem of a fully stamped record
- update: UpdateExpression over the supplied fields only, plus updatedAt,
  conditioned on the record existing
- delete: unconditional DeleteItem

Every public method first makes sure the table exists.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union

from boto3.dynamodb.conditions import Attr
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ...config import DynamoDBConfig
from ...core import TableGateway, TableManager, create_table_gateway
from ...exceptions import ConflictError, OperationFailedError, ValidationError
from ...models import Student, StudentCreate, StudentUpdate
from ...utils import TimestampIdGenerator, build_update_expression, utc_now

logger = logging.getLogger(__name__)

DTO = TypeVar('DTO', bound=BaseModel)


def coerce_dto(dto_class: Type[DTO], data: Union[DTO, Dict[str, Any]]) -> DTO:
    """Validate a plain dict into dto_class; DTO instances pass through.

    Raises:
        ValidationError: The data does not satisfy dto_class
    """
    if isinstance(data, dto_class):
        return data
    try:
        return dto_class.model_validate(data)
    except PydanticValidationError as e:
        errors = {
            ".".join(str(part) for part in error['loc']) or "__root__": error['msg']
            for error in e.errors()
        }
        raise ValidationError(f"Invalid student data: {e.error_count()} error(s)", errors, e) from e


class StudentWriteApi:
    """
    Write-only API for student records.
    """

    def __init__(
        self,
        config: DynamoDBConfig,
        gateway: Optional[TableGateway] = None,
        table_manager: Optional[TableManager] = None,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """Initialize write API with configuration.

        Args:
            config: DynamoDB configuration
            gateway: Gateway to reuse (created from config if omitted)
            table_manager: Table manager to reuse (created for the gateway if omitted)
            id_factory: Issues new student ids (timestamp-derived by default)
            clock: Returns the current UTC time for createdAt/updatedAt
        """
        self.config = config
        self.gateway = gateway or create_table_gateway(config)
        self.table_manager = table_manager or TableManager(self.gateway)
        self.id_factory = id_factory or TimestampIdGenerator()
        self.clock = clock or utc_now

    def create(self, data: Union[StudentCreate, Dict[str, Any]]) -> Student:
        """
        Create a new student.

        DynamoDB Operation: PutItem (no condition - last write wins on id collision)

        Args:
            data: StudentCreate DTO or equivalent dict

        Returns:
            The stored student, with createdAt == updatedAt

        Raises:
            ValidationError: Invalid student data
            OperationFailedError: "Failed to create student"
        """
        student_data = coerce_dto(StudentCreate, data)
        self.table_manager.ensure_exists()

        now = self.clock()
        student = Student(
            id=self.id_factory(),
            created_at=now,
            updated_at=now,
            **student_data.model_dump()
        )

        try:
            self.gateway.put_item(student.to_dynamodb_item())
        except Exception as e:
            logger.error(f"Error creating student: {e}")
            raise OperationFailedError("Failed to create student", "CreateStudent", e) from e

        logger.info(f"Created student: {student.id}")
        return student

    def update(self, student_id: str, data: Union[StudentUpdate, Dict[str, Any]]) -> Optional[Student]:
        """
        Update the supplied fields of a student and refresh updatedAt.

        DynamoDB Operation: UpdateItem with ConditionExpression attribute_exists(id)

        Args:
            student_id: Student identifier
            data: StudentUpdate DTO or equivalent dict; None fields are skipped

        Returns:
            The student after the update, or None if no student has this id
            (nothing is written in that case)

        Raises:
            ValidationError: Invalid or unknown fields
            OperationFailedError: "Failed to update student"
        """
        updates = coerce_dto(StudentUpdate, data)
        self.table_manager.ensure_exists()

        fields = updates.provided_fields()
        fields[Student.attribute_name('updated_at')] = self.clock().isoformat()
        update_expression, expression_names, expression_values = build_update_expression(fields)

        try:
            attributes = self.gateway.update_item(
                key=Student.Meta.build_key(student_id),
                update_expression=update_expression,
                expression_attribute_values=expression_values,
                expression_attribute_names=expression_names,
                condition_expression=Attr(Student.Meta.partition_key).exists(),
                return_values='ALL_NEW'
            )
            student = Student.from_dynamodb_item(attributes)
        except ConflictError:
            logger.info(f"Student {student_id} not found, nothing updated")
            return None
        except Exception as e:
            logger.error(f"Error updating student {student_id}: {e}")
            raise OperationFailedError("Failed to update student", "UpdateStudent", e) from e

        logger.info(f"Updated student {student_id}: {list(fields.keys())}")
        return student

    def delete(self, student_id: str) -> str:
        """
        Delete a student.

        DynamoDB Operation: DeleteItem (no condition)

        Returns:
            student_id, whether or not the student existed

        Raises:
            OperationFailedError: "Failed to delete student"
        """
        self.table_manager.ensure_exists()

        try:
            self.gateway.delete_item(key=Student.Meta.build_key(student_id))
        except Exception as e:
            logger.error(f"Error deleting student {student_id}: {e}")
            raise OperationFailedError("Failed to delete student", "DeleteStudent", e) from e

        logger.info(f"Deleted student: {student_id}")
        return student_id
