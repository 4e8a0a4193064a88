"""Async wrapper running a blocking device store in the default executor."""

import asyncio

from city_devices.dal import DeviceStore
from city_devices.models.device import DeviceStatus
from city_devices.models.outcome import FetchResult, MutateResult


class AsyncDevicesHandler:
    """Exposes a blocking device store as coroutines."""

    def __init__(self, store: DeviceStore):
        self.store = store

    async def fetch(self, device_id: str, city_id: str) -> FetchResult:
        """Fetch a device (non-blocking async wrapper)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.store.fetch, device_id, city_id)

    async def mutate(self, device_id: str, city_id: str, new_status: DeviceStatus) -> MutateResult:
        """Set a device status (non-blocking async wrapper)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.store.mutate, device_id, city_id, new_status)
