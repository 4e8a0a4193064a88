"""
Device Events Lambda Function - Entry point for EventBridge device events.

This module serves as the deployed Lambda entry point and delegates to the
device events handler.
"""

from typing import Any, Dict

from aws_lambda_powertools.utilities.typing import LambdaContext
from city_devices.handlers.device_events_handler import lambda_handler as device_events_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for device events.

    Args:
        event: EventBridge event whose detail carries the request
        context: Lambda context object

    Returns:
        Response dictionary
    """
    return device_events_handler(event, context)
