"""
Input models for request validation using Pydantic.

Identifiers are checked with ``mode='before'`` validators so that a missing
identifier, a blank one and a malformed one each raise their own error type.
The request validator relies on those error types to report violations in a
fixed category order.
"""

import re
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from city_devices.models.device import DeviceOperation

UUID_PATTERN = re.compile(r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}')

# Custom error types raised by the validators below
BLANK_IDENTIFIER = 'blank_identifier'
INVALID_IDENTIFIER = 'invalid_identifier'
MISSING_OPERATION = 'missing_operation'
INVALID_OPERATION = 'invalid_operation'


def check_identifier(value: Any, label: str) -> str:
    """
    Check that an identifier is present, non-blank and UUID formatted.

    Args:
        value: Raw value taken from the payload
        label: Human readable field name used in error messages

    Returns:
        The identifier unchanged

    Raises:
        PydanticCustomError: If the identifier is blank or malformed
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError(BLANK_IDENTIFIER, '{label} cannot be blank.', {'label': label})
    if not isinstance(value, str) or not UUID_PATTERN.fullmatch(value):
        raise PydanticCustomError(INVALID_IDENTIFIER, '{label} must have a valid format.', {'label': label})
    return value


class DeviceReadRequest(BaseModel):
    """Request model for reading a device."""

    model_config = ConfigDict(populate_by_name=True)

    device_id: Annotated[str, Field(
        default=None,
        validate_default=True,
        alias='deviceId',
        description='Identifier of the device',
        examples=['37f44ed4-7ef5-47bf-9e5a-a0f3c2d1b431']
    )]

    city_id: Annotated[str, Field(
        default=None,
        validate_default=True,
        alias='cityId',
        description='Identifier of the city that owns the device',
        examples=['a0ecb466-7ef5-47bf-b1d3-c9e4f2a8e128']
    )]

    @field_validator('device_id', mode='before')
    @classmethod
    def validate_device_id(cls, v: Any) -> str:
        """Validate the device identifier."""
        return check_identifier(v, 'Device ID')

    @field_validator('city_id', mode='before')
    @classmethod
    def validate_city_id(cls, v: Any) -> str:
        """Validate the city identifier."""
        return check_identifier(v, 'City ID')


class DeviceUpdateRequest(DeviceReadRequest):
    """Request model for changing the status of a device."""

    operation: Annotated[DeviceOperation, Field(
        default=None,
        validate_default=True,
        validation_alias=AliasChoices('deviceOperation', 'operation'),
        serialization_alias='deviceOperation',
        description='Requested status transition',
        examples=['ACTIVATE', 'DEACTIVATE']
    )]

    @field_validator('operation', mode='before')
    @classmethod
    def validate_operation(cls, v: Any) -> DeviceOperation:
        """Validate that the operation is present and recognized."""
        if v is None:
            raise PydanticCustomError(MISSING_OPERATION, 'Device operation cannot be null.')
        if isinstance(v, DeviceOperation):
            return v
        try:
            return DeviceOperation(v)
        except ValueError:
            allowed = ', '.join(operation.value for operation in DeviceOperation)
            raise PydanticCustomError(
                INVALID_OPERATION,
                'Device operation must be one of: {allowed}.',
                {'allowed': allowed},
            )
