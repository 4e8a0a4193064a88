"""
Request validation for the device functions.

The Pydantic request models collect every violation in a payload; this module
reduces them to the single violation reported to the caller. Violations are
ranked by category (missing or blank fields first, then identifier format,
then the operation value) and the first one in that order wins.
"""

from typing import Any, Dict, Type

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, ValidationError

from city_devices.handlers.utils.observability import logger, metrics
from city_devices.models.input import (
    BLANK_IDENTIFIER,
    INVALID_IDENTIFIER,
    INVALID_OPERATION,
    MISSING_OPERATION,
    DeviceReadRequest,
    DeviceUpdateRequest,
)
from city_devices.models.outcome import ErrorKind, Failure, ValidationResult, ValidRequest

NULL_PAYLOAD_MESSAGE = 'Request payload cannot be null.'
NULL_EVENT_DETAIL_MESSAGE = 'Event detail cannot be null.'

# Lower rank is reported first
CATEGORY_RANKS: Dict[str, int] = {
    BLANK_IDENTIFIER: 0,
    MISSING_OPERATION: 0,
    INVALID_IDENTIFIER: 1,
    INVALID_OPERATION: 2,
}
UNRANKED = len(set(CATEGORY_RANKS.values()))


class RequestValidator:
    """Validates device requests and reports the first violation."""

    def __init__(self, null_payload_message: str = NULL_PAYLOAD_MESSAGE):
        """
        Initialize the validator.

        Args:
            null_payload_message: Message used when the payload is missing or not an object
        """
        self.null_payload_message = null_payload_message

    @staticmethod
    def _model_for(require_operation: bool) -> Type[BaseModel]:
        return DeviceUpdateRequest if require_operation else DeviceReadRequest

    def validate(self, payload: Any, require_operation: bool) -> ValidationResult:
        """
        Validate a request payload.

        Args:
            payload: Raw invocation payload
            require_operation: Whether the device operation must be present and valid

        Returns:
            ValidRequest wrapping the parsed model, or a validation Failure
        """
        if not isinstance(payload, dict):
            logger.warning('Request payload is not an object', extra={
                'payload_type': type(payload).__name__,
            })
            metrics.add_metric(name='ValidationErrorCount', unit=MetricUnit.Count, value=1)
            return Failure(kind=ErrorKind.VALIDATION, message=self.null_payload_message)

        try:
            request = self._model_for(require_operation).model_validate(payload)
        except ValidationError as e:
            message = self.first_violation(e)
            logger.warning('Request validation failed', extra={
                'error_count': e.error_count(),
                'reported_message': message,
            })
            metrics.add_metric(name='ValidationErrorCount', unit=MetricUnit.Count, value=1)
            return Failure(kind=ErrorKind.VALIDATION, message=message)

        return ValidRequest(request=request)

    @staticmethod
    def first_violation(error: ValidationError) -> str:
        """
        Pick the violation to report from a Pydantic validation error.

        Errors arrive in field declaration order, so a stable sort on the
        category rank keeps that order within a category.

        Args:
            error: Validation error raised by a request model

        Returns:
            Message of the highest priority violation
        """
        violations = sorted(
            error.errors(include_url=False),
            key=lambda violation: CATEGORY_RANKS.get(violation['type'], UNRANKED),
        )
        return violations[0]['msg']


# Built once per process and shared by every invocation
request_validator = RequestValidator()
event_detail_validator = RequestValidator(null_payload_message=NULL_EVENT_DETAIL_MESSAGE)
