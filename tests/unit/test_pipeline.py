"""
Unit tests for the device pipeline.

The store is replaced by a recording fake for the blocking runner and by
AsyncMock for the async runner, so every transition can be checked without
DynamoDB.
"""

from typing import List, Tuple
from unittest.mock import AsyncMock

import pytest

from city_devices.logic.pipeline import DevicePipeline, FetchCall, MutateCall, PipelineMode
from city_devices.logic.request_validator import event_detail_validator
from city_devices.models.device import DeviceStatus
from city_devices.models.outcome import Applied, Found, NotFound, StoreError

from tests.scenarios import ACTIVE_DEVICE_ID, ENABLED_CITY_ID, MALFORMED_DEVICE_ID


class RecordingStore:
    """Blocking store returning canned results and recording calls."""

    def __init__(self, fetch_result, mutate_result=None):
        self.fetch_result = fetch_result
        self.mutate_result = mutate_result if mutate_result is not None else Applied()
        self.calls: List[Tuple] = []

    def fetch(self, device_id, city_id):
        self.calls.append(("fetch", device_id, city_id))
        return self.fetch_result

    def mutate(self, device_id, city_id, new_status):
        self.calls.append(("mutate", device_id, city_id, new_status))
        return self.mutate_result


class ExplodingStore:
    """Store raising an unexpected exception."""

    def fetch(self, device_id, city_id):
        raise RuntimeError("connection reset")

    def mutate(self, device_id, city_id, new_status):
        raise AssertionError("mutate must not be reached")


def async_store(fetch_result, mutate_result=None) -> AsyncMock:
    store = AsyncMock()
    store.fetch.return_value = fetch_result
    store.mutate.return_value = mutate_result if mutate_result is not None else Applied()
    return store


@pytest.fixture
def read_pipeline():
    return DevicePipeline(mode=PipelineMode.READ)


@pytest.fixture
def write_pipeline():
    return DevicePipeline(mode=PipelineMode.WRITE)


class TestPipelineSteps:
    """Test cases for the generator body."""

    def test_write_yields_fetch_then_mutate(self, write_pipeline, update_request, enabled_city_device):
        steps = write_pipeline.steps(update_request)

        assert next(steps) == FetchCall(device_id=ACTIVE_DEVICE_ID, city_id=ENABLED_CITY_ID)
        assert steps.send(Found(device=enabled_city_device)) == MutateCall(
            device_id=ACTIVE_DEVICE_ID,
            city_id=ENABLED_CITY_ID,
            new_status=DeviceStatus.ON,
        )

        with pytest.raises(StopIteration) as stop:
            steps.send(Applied())
        assert stop.value.value.device is None

    def test_invalid_request_yields_nothing(self, read_pipeline):
        steps = read_pipeline.steps({"deviceId": MALFORMED_DEVICE_ID, "cityId": ENABLED_CITY_ID})

        with pytest.raises(StopIteration) as stop:
            next(steps)
        assert stop.value.value.message == "Device ID must have a valid format."


class TestBlockingRun:
    """Test cases for the blocking runner."""

    def test_read_success(self, read_pipeline, read_request, enabled_city_device):
        store = RecordingStore(Found(device=enabled_city_device))

        payload = read_pipeline.run(read_request, store).to_payload()

        assert payload == {
            "statusCode": 200,
            "id": ACTIVE_DEVICE_ID,
            "name": "Street light 31",
            "cityId": ENABLED_CITY_ID,
            "status": "OFF",
        }
        assert store.calls == [("fetch", ACTIVE_DEVICE_ID, ENABLED_CITY_ID)]

    def test_validation_failure_skips_store(self, read_pipeline):
        store = RecordingStore(NotFound())

        response = read_pipeline.run({"deviceId": ACTIVE_DEVICE_ID, "cityId": ""}, store)

        assert response.to_payload() == {"statusCode": 400, "errorMessage": "City ID cannot be blank."}
        assert store.calls == []

    def test_not_found(self, read_pipeline, read_request):
        response = read_pipeline.run(read_request, RecordingStore(NotFound()))

        assert response.to_payload() == {"statusCode": 404, "errorMessage": "Device not found."}

    def test_fetch_store_error(self, write_pipeline, update_request):
        store = RecordingStore(StoreError(message="DynamoDB error: throttled"))

        response = write_pipeline.run(update_request, store)

        assert response.to_payload() == {"statusCode": 500, "errorMessage": "Internal server error."}
        assert [call[0] for call in store.calls] == ["fetch"]

    @pytest.mark.parametrize("mode", list(PipelineMode))
    def test_disabled_city(self, mode, update_request, disabled_city_device):
        """Test that a disabled city blocks reads and writes before any mutation."""
        store = RecordingStore(Found(device=disabled_city_device))

        response = DevicePipeline(mode=mode).run(update_request, store)

        assert response.to_payload() == {"statusCode": 406, "errorMessage": "City is disabled."}
        assert [call[0] for call in store.calls] == ["fetch"]

    @pytest.mark.parametrize("operation,expected_status", [
        ("ACTIVATE", DeviceStatus.ON),
        ("DEACTIVATE", DeviceStatus.OFF),
    ])
    def test_write_success(self, write_pipeline, update_request, enabled_city_device, operation, expected_status):
        store = RecordingStore(Found(device=enabled_city_device))

        response = write_pipeline.run({**update_request, "deviceOperation": operation}, store)

        assert response.to_payload() == {"statusCode": 200}
        assert store.calls[-1] == ("mutate", ACTIVE_DEVICE_ID, ENABLED_CITY_ID, expected_status)

    def test_mutate_store_error(self, write_pipeline, update_request, enabled_city_device):
        store = RecordingStore(Found(device=enabled_city_device), StoreError(message="DynamoDB error: denied"))

        response = write_pipeline.run(update_request, store)

        assert response.to_payload() == {"statusCode": 500, "errorMessage": "Internal server error."}

    def test_unexpected_exception(self, read_pipeline, read_request):
        response = read_pipeline.run(read_request, ExplodingStore())

        assert response.to_payload() == {"statusCode": 500, "errorMessage": "Internal server error."}

    def test_configured_success_code(self, update_request, enabled_city_device):
        pipeline = DevicePipeline(mode=PipelineMode.WRITE, success_status_code=204)

        response = pipeline.run(update_request, RecordingStore(Found(device=enabled_city_device)))

        assert response.to_payload() == {"statusCode": 204}


class TestAsyncRun:
    """Test cases for the async runner."""

    @pytest.mark.asyncio
    async def test_read_success(self, read_pipeline, read_request, enabled_city_device):
        store = async_store(Found(device=enabled_city_device))

        response = await read_pipeline.run_async(read_request, store)

        assert response.status_code == 200
        assert response.id == ACTIVE_DEVICE_ID
        store.fetch.assert_awaited_once_with(ACTIVE_DEVICE_ID, ENABLED_CITY_ID)
        store.mutate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_write_success(self, update_request, enabled_city_device):
        pipeline = DevicePipeline(mode=PipelineMode.WRITE, validator=event_detail_validator, success_status_code=204)
        store = async_store(Found(device=enabled_city_device))

        response = await pipeline.run_async(update_request, store)

        assert response.to_payload() == {"statusCode": 204}
        store.mutate.assert_awaited_once_with(ACTIVE_DEVICE_ID, ENABLED_CITY_ID, DeviceStatus.ON)

    @pytest.mark.asyncio
    async def test_disabled_city_never_mutates(self, write_pipeline, update_request, disabled_city_device):
        store = async_store(Found(device=disabled_city_device))

        response = await write_pipeline.run_async(update_request, store)

        assert response.to_payload() == {"statusCode": 406, "errorMessage": "City is disabled."}
        store.mutate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_detail(self):
        pipeline = DevicePipeline(mode=PipelineMode.WRITE, validator=event_detail_validator)
        store = async_store(NotFound())

        response = await pipeline.run_async(None, store)

        assert response.to_payload() == {"statusCode": 400, "errorMessage": "Event detail cannot be null."}
        store.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_not_found(self, write_pipeline, update_request):
        response = await write_pipeline.run_async(update_request, async_store(NotFound()))

        assert response.to_payload() == {"statusCode": 404, "errorMessage": "Device not found."}

    @pytest.mark.asyncio
    async def test_unexpected_exception(self, write_pipeline, update_request):
        store = AsyncMock()
        store.fetch.side_effect = RuntimeError("event loop closed")

        response = await write_pipeline.run_async(update_request, store)

        assert response.to_payload() == {"statusCode": 500, "errorMessage": "Internal server error."}
