#!/usr/bin/env python3
"""
Students Table Admin

Provision and inspect the students table using the environment configuration
(AWS_REGION, STUDENTS_TABLE, DYNAMODB_ENDPOINT_URL, ...).
"""

import logging
import sys

from student_records import DynamoDBConfig, OperationFailedError, create_student_service


def ensure_table(service):
    """Create the table if needed and wait for it."""
    print(f"⏳ Ensuring table {service.table_name} exists...")
    service.ensure_table_exists()
    print(f"✅ Table {service.table_name} is ready")
    return True


def describe_table(service):
    """Print table metadata."""
    info = service.describe_table()
    if info is None:
        print(f"❌ Table {service.table_name} does not exist")
        return False

    print(f"Table:          {info.name}")
    print(f"Status:         {info.status}")
    print(f"Items:          {info.item_count}")
    print(f"Size (bytes):   {info.size_bytes}")
    print(f"Created:        {info.creation_date}")
    print(f"Billing mode:   {info.billing_mode}")
    print(f"Read capacity:  {info.read_capacity}")
    print(f"Write capacity: {info.write_capacity}")
    return True


def list_tables(service):
    """Print every table name in the account/region."""
    for name in service.list_tables():
        marker = "*" if name == service.table_name else " "
        print(f"{marker} {name}")
    return True


COMMANDS = {
    "ensure": ensure_table,
    "describe": describe_table,
    "list": list_tables,
}


def main():
    """Main entry point."""
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(f"Usage: python3 scripts/students_table.py {{{'|'.join(COMMANDS)}}}")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    service = create_student_service(DynamoDBConfig.from_env())

    try:
        success = COMMANDS[sys.argv[1]](service)
    except OperationFailedError as e:
        print(f"❌ {e.message}: {e.original_error}")
        success = False

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
