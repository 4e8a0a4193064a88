"""
Business rules applied to a fetched device.

Both functions are pure: the gate decides whether an operation may proceed
and the translator maps a requested operation onto the persisted status.
"""

from typing import Dict

from city_devices.models.device import Device, DeviceOperation, DeviceStatus
from city_devices.models.outcome import Allowed, Blocked, GateResult

CITY_DISABLED_REASON = 'City is disabled.'

OPERATION_STATUS: Dict[DeviceOperation, DeviceStatus] = {
    DeviceOperation.ACTIVATE: DeviceStatus.ON,
    DeviceOperation.DEACTIVATE: DeviceStatus.OFF,
}


def evaluate_gate(device: Device) -> GateResult:
    """Block every operation on a device whose city is disabled."""
    if device.is_city_disabled:
        return Blocked(reason=CITY_DISABLED_REASON)
    return Allowed()


def translate_operation(operation: DeviceOperation) -> DeviceStatus:
    return OPERATION_STATUS[operation]
