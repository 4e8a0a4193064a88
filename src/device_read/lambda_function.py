"""
Device Read Lambda Function - Entry point returning a device.

This module serves as the deployed Lambda entry point and delegates to the
device read handler.
"""

from typing import Any, Dict

from aws_lambda_powertools.utilities.typing import LambdaContext
from city_devices.handlers.device_read_handler import lambda_handler as device_read_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for device reads.

    Args:
        event: Request payload with deviceId and cityId
        context: Lambda context object

    Returns:
        Response dictionary
    """
    return device_read_handler(event, context)
