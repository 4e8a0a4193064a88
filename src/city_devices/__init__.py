"""
City Devices Service Module.

Lambda functions reading and changing the status of city devices stored in
DynamoDB, following a three-layer architecture:

- handlers: Lambda entry points and response encoding
- logic: request validation, business rules and the device pipeline
- dal: DynamoDB access for devices
- models: domain, request, response and result models
"""

__version__ = "1.0.0"

# Re-export commonly used classes for convenience
from city_devices.models.device import CityStatus, Device, DeviceOperation, DeviceStatus
from city_devices.models.output import OperationResponse
from city_devices.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "Device",
    "DeviceStatus",
    "CityStatus",
    "DeviceOperation",
    "OperationResponse",
    "logger",
    "tracer",
    "metrics",
]
