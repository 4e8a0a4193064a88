"""
Data Access Layer (DAL) for the device functions.

This module provides the store interfaces consumed by the pipeline and the
factory functions returning the process-wide DynamoDB store.
"""

from typing import Optional, Protocol, runtime_checkable

from city_devices.models.device import DeviceStatus
from city_devices.models.outcome import FetchResult, MutateResult


@runtime_checkable
class DeviceStore(Protocol):
    """Protocol defining the blocking device store."""

    def fetch(self, device_id: str, city_id: str) -> FetchResult:
        """Retrieve a device by its (device_id, city_id) key."""
        ...

    def mutate(self, device_id: str, city_id: str, new_status: DeviceStatus) -> MutateResult:
        """Set the status of a device."""
        ...


@runtime_checkable
class AsyncDeviceStore(Protocol):
    """Protocol defining the async device store."""

    async def fetch(self, device_id: str, city_id: str) -> FetchResult:
        """Retrieve a device by its (device_id, city_id) key."""
        ...

    async def mutate(self, device_id: str, city_id: str, new_status: DeviceStatus) -> MutateResult:
        """Set the status of a device."""
        ...


# Created on first use so the boto3 resource is built once per process
_device_store: Optional[DeviceStore] = None


def get_device_store() -> DeviceStore:
    """
    Get or create the process-wide DynamoDB device store.

    Returns:
        DAL handler configured from the environment
    """
    global _device_store

    if _device_store is None:
        # Import here to avoid circular imports
        from city_devices.dal.dynamodb_handler import DevicesDynamoDbHandler
        from city_devices.handlers.models.env_vars import get_handler_env_vars

        env_vars = get_handler_env_vars()
        _device_store = DevicesDynamoDbHandler(
            table_name=env_vars.DEVICES_TABLE_NAME,
            region_name=env_vars.AWS_REGION,
            endpoint_url=env_vars.DYNAMODB_ENDPOINT,
        )

    return _device_store


def get_async_device_store() -> AsyncDeviceStore:
    """Get an async view over the process-wide device store."""
    from city_devices.dal.async_handler import AsyncDevicesHandler

    return AsyncDevicesHandler(get_device_store())


__all__ = [
    'DeviceStore',
    'AsyncDeviceStore',
    'get_device_store',
    'get_async_device_store',
]
