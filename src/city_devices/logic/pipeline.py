"""
Business Logic Layer for device operations.

Every device function runs the same pipeline: validate the request, fetch the
device, refuse the operation when its city is disabled, change the status in
write mode, then encode the outcome as a response.

The steps are written once as a generator that yields store calls and returns
the outcome. ``DevicePipeline.run`` performs those calls against a blocking
store and ``DevicePipeline.run_async`` awaits them on an async store, so both
shapes share the same ordering and branching.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generator, Union

from aws_lambda_powertools.metrics import MetricUnit

from city_devices.dal import AsyncDeviceStore, DeviceStore
from city_devices.handlers.utils.observability import logger, metrics, tracer
from city_devices.handlers.utils.responses import (
    INTERNAL_ERROR_MESSAGE,
    OK_STATUS_CODE,
    encode,
    log_error_metrics,
)
from city_devices.logic.device_rules import evaluate_gate, translate_operation
from city_devices.logic.request_validator import RequestValidator, request_validator
from city_devices.models.device import DeviceStatus
from city_devices.models.outcome import (
    Blocked,
    ErrorKind,
    Failure,
    NotFound,
    Outcome,
    StoreError,
    Success,
)
from city_devices.models.output import OperationResponse

DEVICE_NOT_FOUND_MESSAGE = 'Device not found.'


class PipelineMode(str, Enum):
    """Whether a pipeline only reads the device or also changes its status."""

    READ = 'READ'
    WRITE = 'WRITE'


@dataclass(frozen=True)
class FetchCall:
    device_id: str
    city_id: str


@dataclass(frozen=True)
class MutateCall:
    device_id: str
    city_id: str
    new_status: DeviceStatus


StoreCall = Union[FetchCall, MutateCall]
Steps = Generator[StoreCall, Any, Outcome]


class DevicePipeline:
    """Validate, fetch, gate and optionally mutate a device."""

    def __init__(
        self,
        mode: PipelineMode,
        validator: RequestValidator = request_validator,
        success_status_code: int = OK_STATUS_CODE,
    ):
        """
        Initialize the pipeline.

        Args:
            mode: READ returns the device, WRITE changes its status
            validator: Shared request validator
            success_status_code: Code returned on success
        """
        self.mode = mode
        self.validator = validator
        self.success_status_code = success_status_code

    def steps(self, payload: Any) -> Steps:
        """
        Pipeline body.

        Yields a FetchCall and, in write mode, a MutateCall. The driver sends
        back the store result for each call. The generator returns the final
        Success or Failure.
        """
        validation = self.validator.validate(payload, require_operation=self.mode is PipelineMode.WRITE)
        if isinstance(validation, Failure):
            return validation

        request = validation.request
        tracer.put_annotation('device_id', request.device_id)
        tracer.put_annotation('city_id', request.city_id)
        logger.debug('Request validated', extra={
            'device_id': request.device_id,
            'city_id': request.city_id,
            'mode': self.mode.value,
        })

        fetched = yield FetchCall(device_id=request.device_id, city_id=request.city_id)
        if isinstance(fetched, NotFound):
            return Failure(kind=ErrorKind.NOT_FOUND, message=DEVICE_NOT_FOUND_MESSAGE)
        if isinstance(fetched, StoreError):
            return Failure(kind=ErrorKind.INTERNAL, message=INTERNAL_ERROR_MESSAGE)

        device = fetched.device
        logger.debug('Device fetched', extra={'device_id': device.id, 'city_status': device.city_status.value})

        gate = evaluate_gate(device)
        if isinstance(gate, Blocked):
            return Failure(kind=ErrorKind.DISABLED_CITY, message=gate.reason)

        if self.mode is PipelineMode.READ:
            return Success(device=device)

        new_status = translate_operation(request.operation)
        mutated = yield MutateCall(device_id=device.id, city_id=device.city_id, new_status=new_status)
        if isinstance(mutated, StoreError):
            return Failure(kind=ErrorKind.INTERNAL, message=INTERNAL_ERROR_MESSAGE)

        logger.info('Device status changed', extra={
            'device_id': device.id,
            'city_id': device.city_id,
            'previous_status': device.status.value,
            'new_status': new_status.value,
        })
        return Success()

    @tracer.capture_method
    def run(self, payload: Any, store: DeviceStore) -> OperationResponse:
        """
        Run the pipeline against a blocking store.

        Args:
            payload: Raw request payload
            store: Device store performing the fetch and mutate calls

        Returns:
            Encoded response, never raises
        """
        try:
            steps = self.steps(payload)
            result = None
            while True:
                call = steps.send(result)
                if isinstance(call, FetchCall):
                    result = store.fetch(call.device_id, call.city_id)
                else:
                    result = store.mutate(call.device_id, call.city_id, call.new_status)
        except StopIteration as stop:
            outcome = stop.value
        except Exception as e:
            outcome = self._unexpected_failure(e)

        return self._respond(outcome)

    async def run_async(self, payload: Any, store: AsyncDeviceStore) -> OperationResponse:
        """
        Run the pipeline against an async store.

        Each store call is awaited before the next step begins.

        Args:
            payload: Raw request payload
            store: Async device store performing the fetch and mutate calls

        Returns:
            Encoded response, never raises
        """
        try:
            steps = self.steps(payload)
            result = None
            while True:
                call = steps.send(result)
                if isinstance(call, FetchCall):
                    result = await store.fetch(call.device_id, call.city_id)
                else:
                    result = await store.mutate(call.device_id, call.city_id, call.new_status)
        except StopIteration as stop:
            outcome = stop.value
        except Exception as e:
            outcome = self._unexpected_failure(e)

        return self._respond(outcome)

    def _unexpected_failure(self, error: Exception) -> Failure:
        logger.exception('Unexpected error in device pipeline', extra={
            'mode': self.mode.value,
            'error_type': type(error).__name__,
        })
        return Failure(kind=ErrorKind.INTERNAL, message=INTERNAL_ERROR_MESSAGE)

    def _respond(self, outcome: Outcome) -> OperationResponse:
        if isinstance(outcome, Failure):
            log_error_metrics(outcome)
        else:
            metrics.add_metric(name='SuccessCount', unit=MetricUnit.Count, value=1)
        return encode(outcome, success_status_code=self.success_status_code)
