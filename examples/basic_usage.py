#!/usr/bin/env python3
"""
Basic usage of the student records library.

1. Setting up configuration
2. Building the service (the table is provisioned on first use)
3. Creating, updating, searching and deleting students
"""

from student_records import (
    DynamoDBConfig,
    StudentCreate,
    StudentUpdate,
    create_student_service,
)


def main():
    """Walk through the student record lifecycle."""

    # 1. Configure DynamoDB connection
    print("1. Setting up DynamoDB configuration...")
    config = DynamoDBConfig.from_env()  # Uses environment variables

    # For local development, you might use:
    # config = DynamoDBConfig.for_local_development()

    # 2. One service handle for the whole program
    print("2. Building the student service...")
    service = create_student_service(config)
    service.ensure_table_exists()
    print(f"Table info: {service.describe_table()}")

    # 3. Create students using validated DTOs (plain dicts work too)
    print("3. Creating students...")
    ada = service.create(StudentCreate(
        full_name="Ada Lovelace",
        address="12 St James's Square, London",
        email="ada@analytical.org",
        phone_number="555-0100"
    ))
    alan = service.create({
        "fullName": "Alan Turing",
        "address": "Bletchley Park, Milton Keynes",
        "email": "alan@bletchley.org",
        "phoneNumber": "555-0199"
    })
    print(f"Created {ada.id} and {alan.id}")

    # 4. Partial update
    print("4. Updating a student...")
    updated = service.update(ada.id, StudentUpdate(phone_number="555-0101"))
    print(f"Updated phone: {updated.phone_number} at {updated.updated_at}")

    # 5. Search
    print("5. Searching...")
    print(f"'alan' -> {[s.full_name for s in service.search('alan')]}")
    print(f"'London' -> {[s.full_name for s in service.search_by_address('London')]}")
    print(f"'bletchley.org' -> {[s.full_name for s in service.search_by_email_domain('bletchley.org')]}")

    # 6. Delete
    print("6. Cleaning up...")
    for student in (ada, alan):
        service.delete(student.id)
    print(f"Remaining students: {len(service.get_all())}")


if __name__ == "__main__":
    main()
