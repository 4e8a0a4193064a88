"""
Lambda Handlers Module.

Each handler wires the device pipeline to one kind of invocation:

- device_read_handler: direct invocation returning a device
- device_update_handler: direct invocation changing a device status
- device_events_handler: EventBridge events changing a device status
"""

# Re-export handler utilities for convenience
from city_devices.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
