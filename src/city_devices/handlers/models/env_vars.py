"""
Environment variable models for type-safe configuration.

This module defines the Pydantic model for the environment variables read by
the device functions. Powertools settings such as POWERTOOLS_SERVICE_NAME and
LOG_LEVEL are read by Powertools itself and are not modeled here.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field

from city_devices.models.device import TABLE_NAME


class DevicesHandlerEnvVars(BaseModel):
    """Environment variables for the device functions."""

    # DynamoDB table holding the devices
    DEVICES_TABLE_NAME: Annotated[str, Field(
        default=TABLE_NAME,
        description='DynamoDB table name for device storage',
        min_length=1
    )] = TABLE_NAME

    # Local DynamoDB endpoint, unset in deployed functions
    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        default=None,
        description='DynamoDB endpoint URL for local testing'
    )] = None

    AWS_REGION: Annotated[str, Field(
        default='us-east-1',
        description='AWS region for service deployment'
    )] = 'us-east-1'


def get_handler_env_vars() -> DevicesHandlerEnvVars:
    """
    Get typed environment variables for the device functions.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=DevicesHandlerEnvVars)
