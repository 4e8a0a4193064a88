"""
Explicit result types passed between pipeline steps.

Every step of the device pipeline returns one of these values instead of
raising, and the orchestrator branches on the concrete type.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel

from city_devices.models.device import Device


class ErrorKind(str, Enum):
    """Classified failure kinds, each mapped to one status code."""

    VALIDATION = 'ValidationError'
    NOT_FOUND = 'NotFoundError'
    DISABLED_CITY = 'DisabledCityError'
    INTERNAL = 'InternalError'


@dataclass(frozen=True)
class Failure:
    """A classified failure carrying the message returned to the caller."""

    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Success:
    """Successful pipeline run; reads carry the fetched device."""

    device: Optional[Device] = None


@dataclass(frozen=True)
class ValidRequest:
    """Request that passed validation."""

    request: BaseModel


# Store results
@dataclass(frozen=True)
class Found:
    device: Device


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class Applied:
    pass


@dataclass(frozen=True)
class StoreError:
    message: str
    error_code: str = 'STORE_ERROR'


# Gate results
@dataclass(frozen=True)
class Allowed:
    pass


@dataclass(frozen=True)
class Blocked:
    reason: str


Outcome = Union[Success, Failure]
ValidationResult = Union[ValidRequest, Failure]
FetchResult = Union[Found, NotFound, StoreError]
MutateResult = Union[Applied, StoreError]
GateResult = Union[Allowed, Blocked]
