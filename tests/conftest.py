"""
Pytest configuration and shared fixtures for the city devices functions.

This module provides common test fixtures and configuration used across
unit and integration tests.
"""

import os
import pytest
from typing import Any, Dict
from unittest.mock import Mock

import boto3
from moto import mock_aws

# Test environment configuration, applied before any handler module is imported
os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "test",
    "AWS_SECRET_ACCESS_KEY": "test",
    "DEVICES_TABLE_NAME": "Devices",
    "POWERTOOLS_SERVICE_NAME": "test-city-devices",
    "POWERTOOLS_METRICS_NAMESPACE": "TestCityDevices",
    "LOG_LEVEL": "DEBUG",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
})

from city_devices.models.device import CityStatus, Device, DeviceStatus  # noqa: E402
from tests.scenarios import (  # noqa: E402
    ACTIVE_DEVICE_ID,
    DISABLED_CITY_DEVICE_ID,
    DISABLED_CITY_ID,
    ENABLED_CITY_ID,
)


# Sample data fixtures
@pytest.fixture
def enabled_city_device() -> Device:
    """Device owned by an enabled city."""
    return Device(
        id=ACTIVE_DEVICE_ID,
        city_id=ENABLED_CITY_ID,
        name="Street light 31",
        description="Corner of Main and First",
        status=DeviceStatus.OFF,
        city_status=CityStatus.ENABLED,
    )


@pytest.fixture
def disabled_city_device() -> Device:
    """Device owned by a disabled city."""
    return Device(
        id=DISABLED_CITY_DEVICE_ID,
        city_id=DISABLED_CITY_ID,
        name="Street light 32",
        status=DeviceStatus.ON,
        city_status=CityStatus.DISABLED,
    )


# DynamoDB fixtures
@pytest.fixture
def dynamodb_table():
    """Create a mock devices table for testing."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

        table = dynamodb.create_table(
            TableName="Devices",
            KeySchema=[
                {"AttributeName": "id", "KeyType": "HASH"},
                {"AttributeName": "cityId", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "id", "AttributeType": "S"},
                {"AttributeName": "cityId", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )

        # Wait for table to be created
        table.wait_until_exists()
        yield table


@pytest.fixture
def populated_table(dynamodb_table, enabled_city_device, disabled_city_device):
    """Devices table seeded with one device per city."""
    dynamodb_table.put_item(Item=enabled_city_device.to_item())
    dynamodb_table.put_item(Item=disabled_city_device.to_item())
    yield dynamodb_table


# Invocation payload fixtures
@pytest.fixture
def read_request() -> Dict[str, Any]:
    return {"deviceId": ACTIVE_DEVICE_ID, "cityId": ENABLED_CITY_ID}


@pytest.fixture
def update_request() -> Dict[str, Any]:
    return {"deviceId": ACTIVE_DEVICE_ID, "cityId": ENABLED_CITY_ID, "deviceOperation": "ACTIVATE"}


@pytest.fixture
def eventbridge_event(update_request) -> Dict[str, Any]:
    """Create a sample EventBridge event for testing."""
    return {
        "version": "0",
        "id": "6a7e8feb-b491-4cf7-a9f1-bf3703467718",
        "detail-type": "Device Operation Requested",
        "source": "city.devices",
        "account": "123456789012",
        "time": "2024-01-01T12:00:00Z",
        "region": "us-east-1",
        "resources": [],
        "detail": update_request,
    }


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-city-devices-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-city-devices-function"
    context.memory_limit_in_mb = "512"
    context.remaining_time_in_millis = lambda: 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-city-devices-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    return context


# Error simulation fixtures
@pytest.fixture
def mock_dynamodb_error():
    """Mock DynamoDB errors for testing error handling."""
    from botocore.exceptions import ClientError

    def create_error(error_code: str, message: str = "Test error"):
        return ClientError(
            error_response={
                "Error": {
                    "Code": error_code,
                    "Message": message,
                }
            },
            operation_name="TestOperation"
        )

    return create_error


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the cached device store and buffered metrics between tests."""
    import city_devices.dal
    from city_devices.handlers.utils.observability import metrics

    city_devices.dal._device_store = None
    yield
    city_devices.dal._device_store = None
    metrics.clear_metrics()
