"""
Device Update Lambda Function - Entry point changing a device status.

This module serves as the deployed Lambda entry point and delegates to the
device update handler.
"""

from typing import Any, Dict

from aws_lambda_powertools.utilities.typing import LambdaContext
from city_devices.handlers.device_update_handler import lambda_handler as device_update_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for device status updates.

    Args:
        event: Request payload with deviceId, cityId and deviceOperation
        context: Lambda context object

    Returns:
        Response dictionary
    """
    return device_update_handler(event, context)
