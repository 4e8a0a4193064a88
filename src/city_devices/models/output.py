"""
Output models for handler responses using Pydantic.

A response carries either the device fields or an error message, never both,
and always a status code. Serialization uses camelCase keys and leaves out
unset fields.
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from city_devices.models.device import DeviceStatus


class OperationResponse(BaseModel):
    """Response returned by every device function."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    status_code: Annotated[int, Field(
        alias='statusCode',
        description='Numeric outcome code',
        examples=[200, 204, 400, 404, 406, 500]
    )]

    id: Annotated[Optional[str], Field(
        default=None,
        description='Identifier of the device, read success only'
    )] = None

    name: Annotated[Optional[str], Field(
        default=None,
        description='Display name of the device, read success only'
    )] = None

    city_id: Annotated[Optional[str], Field(
        default=None,
        alias='cityId',
        description='Identifier of the owning city, read success only'
    )] = None

    status: Annotated[Optional[DeviceStatus], Field(
        default=None,
        description='Current status of the device, read success only'
    )] = None

    error_message: Annotated[Optional[str], Field(
        default=None,
        alias='errorMessage',
        description='Reason for the failure, failure only',
        examples=['Device not found.']
    )] = None

    @model_validator(mode='after')
    def check_exclusive_shapes(self) -> 'OperationResponse':
        """Reject responses that mix device fields with an error message."""
        if self.error_message is not None and any(
            value is not None for value in (self.id, self.name, self.city_id, self.status)
        ):
            raise ValueError('A response cannot carry both device fields and an error message')
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the wire shape returned from the Lambda function."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)
