"""
Tests for StudentService wiring and delegation (handlers/students/service.py)
"""

from unittest.mock import Mock, patch

import pytest

from student_records.handlers.students.service import StudentService, create_student_service


@pytest.fixture
def read_api():
    return Mock()


@pytest.fixture
def write_api():
    return Mock()


@pytest.fixture
def service(mock_dynamodb_config, mock_gateway, mock_table_manager, read_api, write_api):
    return StudentService(
        mock_dynamodb_config,
        gateway=mock_gateway,
        table_manager=mock_table_manager,
        read_api=read_api,
        write_api=write_api
    )


class TestWiring:

    def test_apis_share_gateway_and_manager(self, mock_dynamodb_config, mock_gateway, mock_table_manager):
        service = StudentService(mock_dynamodb_config, gateway=mock_gateway, table_manager=mock_table_manager)

        assert service.read_api.gateway is mock_gateway
        assert service.write_api.gateway is mock_gateway
        assert service.read_api.table_manager is mock_table_manager
        assert service.write_api.table_manager is mock_table_manager
        assert service.table_name == "test_students-table"

    def test_factory_reads_environment_config(self, mock_dynamodb_config):
        with patch('student_records.handlers.students.service.DynamoDBConfig.from_env',
                   return_value=mock_dynamodb_config) as from_env:
            with patch('student_records.handlers.students.service.create_table_gateway') as create_gateway:
                create_gateway.return_value = Mock(config=mock_dynamodb_config, table_name="t")
                service = create_student_service()

        from_env.assert_called_once()
        create_gateway.assert_called_once_with(mock_dynamodb_config)
        assert service.config is mock_dynamodb_config


class TestDelegation:

    def test_table_lifecycle(self, service, mock_table_manager):
        mock_table_manager.list_all.return_value = ["a", "b"]

        assert service.ensure_table_exists() is True
        assert service.list_tables() == ["a", "b"]
        service.describe_table()

        mock_table_manager.describe.assert_called_once_with()

    def test_commands(self, service, write_api):
        service.create({"fullName": "A"})
        service.update("1", {"fullName": "B"})
        service.delete("1")

        write_api.create.assert_called_once_with({"fullName": "A"})
        write_api.update.assert_called_once_with("1", {"fullName": "B"})
        write_api.delete.assert_called_once_with("1")

    def test_queries(self, service, read_api):
        service.get_all()
        service.get_by_id("1")
        service.search("ada")
        service.search_by_address("London")
        service.search_by_email_domain("foo.com")

        read_api.get_all.assert_called_once_with()
        read_api.get_by_id.assert_called_once_with("1")
        read_api.search.assert_called_once_with("ada")
        read_api.search_by_address.assert_called_once_with("London")
        read_api.search_by_email_domain.assert_called_once_with("foo.com")
