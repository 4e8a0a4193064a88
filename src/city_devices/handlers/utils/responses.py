"""
Response encoding and error reporting for the device functions.

This module maps pipeline outcomes onto the numeric status codes returned to
callers and records the matching error metrics.
"""

from typing import Dict

from aws_lambda_powertools.metrics import MetricUnit

from city_devices.handlers.utils.observability import logger, metrics, tracer
from city_devices.models.outcome import ErrorKind, Failure, Outcome
from city_devices.models.output import OperationResponse

OK_STATUS_CODE = 200
NO_CONTENT_STATUS_CODE = 204
INTERNAL_ERROR_MESSAGE = 'Internal server error.'

ERROR_STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DISABLED_CITY: 406,
    ErrorKind.INTERNAL: 500,
}


def get_status_code(kind: ErrorKind) -> int:
    """Get the status code for a classified failure."""
    return ERROR_STATUS_CODES[kind]


def encode(outcome: Outcome, success_status_code: int = OK_STATUS_CODE) -> OperationResponse:
    """
    Encode a pipeline outcome as an operation response.

    Args:
        outcome: Success or classified Failure
        success_status_code: Code returned on success

    Returns:
        Response carrying either the device fields or the error message
    """
    if isinstance(outcome, Failure):
        return OperationResponse(
            status_code=get_status_code(outcome.kind),
            error_message=outcome.message,
        )

    if outcome.device is None:
        return OperationResponse(status_code=success_status_code)

    device = outcome.device
    return OperationResponse(
        status_code=success_status_code,
        id=device.id,
        name=device.name,
        city_id=device.city_id,
        status=device.status,
    )


def internal_error_response() -> OperationResponse:
    return encode(Failure(kind=ErrorKind.INTERNAL, message=INTERNAL_ERROR_MESSAGE))


def log_error_metrics(failure: Failure) -> None:
    """Log error metrics for monitoring and alerting."""

    metrics.add_metric(name='ErrorCount', unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f'{failure.kind.value}Count', unit=MetricUnit.Count, value=1)

    tracer.put_annotation('error_kind', failure.kind.value)

    log_fields = {
        'error_kind': failure.kind.value,
        'error_message': failure.message,
        'status_code': get_status_code(failure.kind),
    }
    if failure.kind is ErrorKind.INTERNAL:
        logger.error('Device operation failed', extra=log_fields)
    else:
        logger.warning('Device operation rejected', extra=log_fields)
