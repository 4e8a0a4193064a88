"""
Device domain model.

This module defines the Device entity read from the devices table together with
the enumerations shared by every function: the device's own status, the owning
city's status and the operations a caller can request.
"""

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

# DynamoDB table and attribute names
TABLE_NAME = 'Devices'
ID_COLUMN_NAME = 'id'
NAME_COLUMN_NAME = 'name'
DESCRIPTION_COLUMN_NAME = 'description'
STATUS_COLUMN_NAME = 'status'
CITY_ID_COLUMN_NAME = 'cityId'
CITY_STATUS_COLUMN_NAME = 'cityStatus'


class DeviceStatus(str, Enum):
    """Operational status of a device."""

    ON = 'ON'
    OFF = 'OFF'


class CityStatus(str, Enum):
    """Enablement status of the city that owns a device."""

    ENABLED = 'ENABLED'
    DISABLED = 'DISABLED'


class DeviceOperation(str, Enum):
    """Status transitions a caller can request."""

    ACTIVATE = 'ACTIVATE'
    DEACTIVATE = 'DEACTIVATE'


class Device(BaseModel):
    """Core Device domain model, addressed by the pair (id, city_id)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Annotated[str, Field(
        description='Unique identifier of the device',
        examples=['37f44ed4-7ef5-47bf-9e5a-a0f3c2d1b431']
    )]

    city_id: Annotated[str, Field(
        alias=CITY_ID_COLUMN_NAME,
        description='Identifier of the city that owns the device',
        examples=['a0ecb466-7ef5-47bf-b1d3-c9e4f2a8e128']
    )]

    name: Annotated[Optional[str], Field(
        default=None,
        description='Display name of the device'
    )] = None

    description: Annotated[Optional[str], Field(
        default=None,
        description='Free text description of the device'
    )] = None

    status: Annotated[DeviceStatus, Field(
        description='Current operational status of the device'
    )]

    city_status: Annotated[CityStatus, Field(
        alias=CITY_STATUS_COLUMN_NAME,
        description='Status of the owning city, stored alongside the device'
    )]

    @property
    def is_city_disabled(self) -> bool:
        """Check if the owning city is disabled."""
        return self.city_status == CityStatus.DISABLED

    @classmethod
    def from_item(cls, item: dict) -> 'Device':
        """
        Create a Device instance from a stored item.

        Args:
            item: Dictionary of attributes as stored in the table

        Returns:
            Device instance

        Raises:
            pydantic.ValidationError: If the item is missing keys or holds unknown enum values
        """
        return cls.model_validate({
            ID_COLUMN_NAME: item.get(ID_COLUMN_NAME),
            CITY_ID_COLUMN_NAME: item.get(CITY_ID_COLUMN_NAME),
            NAME_COLUMN_NAME: item.get(NAME_COLUMN_NAME),
            DESCRIPTION_COLUMN_NAME: item.get(DESCRIPTION_COLUMN_NAME),
            STATUS_COLUMN_NAME: item.get(STATUS_COLUMN_NAME),
            CITY_STATUS_COLUMN_NAME: item.get(CITY_STATUS_COLUMN_NAME),
        })

    def to_item(self) -> dict:
        """
        Convert the device to a dictionary for storage.

        Returns:
            Dictionary keyed by table attribute names
        """
        item = {
            ID_COLUMN_NAME: self.id,
            CITY_ID_COLUMN_NAME: self.city_id,
            STATUS_COLUMN_NAME: self.status.value,
            CITY_STATUS_COLUMN_NAME: self.city_status.value,
        }
        if self.name is not None:
            item[NAME_COLUMN_NAME] = self.name
        if self.description is not None:
            item[DESCRIPTION_COLUMN_NAME] = self.description
        return item
