"""
City Devices Models Package

This package contains the Pydantic models and result types used throughout the
functions: the device domain model, request and response models, and the
explicit outcomes exchanged between pipeline steps.
"""

from .device import CityStatus, Device, DeviceOperation, DeviceStatus
from .input import DeviceReadRequest, DeviceUpdateRequest
from .outcome import (
    Allowed,
    Applied,
    Blocked,
    ErrorKind,
    Failure,
    FetchResult,
    Found,
    GateResult,
    MutateResult,
    NotFound,
    Outcome,
    StoreError,
    Success,
    ValidationResult,
    ValidRequest,
)
from .output import OperationResponse

__all__ = [
    # Domain models
    "Device",
    "DeviceStatus",
    "CityStatus",
    "DeviceOperation",

    # Input models
    "DeviceReadRequest",
    "DeviceUpdateRequest",

    # Output models
    "OperationResponse",

    # Results
    "ErrorKind",
    "Failure",
    "Success",
    "ValidRequest",
    "Found",
    "NotFound",
    "Applied",
    "StoreError",
    "Allowed",
    "Blocked",
    "Outcome",
    "ValidationResult",
    "FetchResult",
    "MutateResult",
    "GateResult",
]
