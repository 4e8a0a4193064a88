"""
Data Access Layer (DAL) for the devices table.

Failures below this layer (client errors, connection errors, malformed items)
are logged and returned as StoreError values; nothing raises to the pipeline.
"""

from typing import Any, Dict, Optional

import boto3
from aws_lambda_powertools.metrics import MetricUnit
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from city_devices.handlers.utils.observability import logger, metrics, tracer
from city_devices.models.device import (
    CITY_ID_COLUMN_NAME,
    ID_COLUMN_NAME,
    STATUS_COLUMN_NAME,
    Device,
    DeviceStatus,
)
from city_devices.models.outcome import Applied, FetchResult, Found, MutateResult, NotFound, StoreError

# "status" is a DynamoDB reserved word
STATUS_ATTRIBUTE_PLACEHOLDER = '#deviceStatus'
NEW_STATUS_PLACEHOLDER = ':new_status'
UPDATE_STATUS_EXPRESSION = f'SET {STATUS_ATTRIBUTE_PLACEHOLDER} = {NEW_STATUS_PLACEHOLDER}'


class DevicesDynamoDbHandler:
    """DynamoDB implementation of the device store."""

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ):
        """
        Initialize DynamoDB handler.

        Args:
            table_name: Name of the DynamoDB table
            region_name: AWS region name
            endpoint_url: DynamoDB endpoint URL (for local testing)
        """
        self.table_name = table_name

        resource_config: Dict[str, Any] = {}
        if region_name:
            resource_config['region_name'] = region_name
        if endpoint_url:
            resource_config['endpoint_url'] = endpoint_url

        self.dynamodb = boto3.resource('dynamodb', **resource_config)
        self.table = self.dynamodb.Table(table_name)

        logger.info('DynamoDB handler initialized', extra={
            'table_name': table_name,
            'region_name': region_name,
            'endpoint_url': endpoint_url,
        })

    @staticmethod
    def _key(device_id: str, city_id: str) -> Dict[str, str]:
        return {ID_COLUMN_NAME: device_id, CITY_ID_COLUMN_NAME: city_id}

    def _client_error(self, operation: str, error: ClientError) -> StoreError:
        error_code = error.response['Error']['Code']
        error_message = error.response['Error']['Message']

        metrics.add_metric(name=f'DynamoDB{operation}Error', unit=MetricUnit.Count, value=1)
        logger.error(f'DynamoDB {operation} error', extra={
            'error_code': error_code,
            'error_message': error_message,
            'table_name': self.table_name,
            'operation': operation,
        })
        return StoreError(message=f'DynamoDB error: {error_message}', error_code=f'DYNAMODB_{error_code}')

    def _connection_error(self, operation: str, error: BotoCoreError) -> StoreError:
        metrics.add_metric(name=f'DynamoDB{operation}Error', unit=MetricUnit.Count, value=1)
        logger.error(f'DynamoDB connection error during {operation}', extra={
            'error': str(error),
            'table_name': self.table_name,
        })
        return StoreError(message=f'Database connection error: {error}', error_code='DATABASE_CONNECTION_ERROR')

    @tracer.capture_method
    def fetch(self, device_id: str, city_id: str) -> FetchResult:
        """
        Get a device from DynamoDB.

        Args:
            device_id: Device identifier (hash key)
            city_id: City identifier (range key)

        Returns:
            Found with the device, NotFound, or StoreError
        """
        metrics.add_metric(name='DynamoDBGetItemCount', unit=MetricUnit.Count, value=1)

        try:
            response = self.table.get_item(Key=self._key(device_id, city_id))
        except ClientError as e:
            return self._client_error('GetItem', e)
        except BotoCoreError as e:
            return self._connection_error('GetItem', e)

        item = response.get('Item')
        if item is None:
            logger.info('Device not found', extra={'device_id': device_id, 'city_id': city_id})
            return NotFound()

        try:
            device = Device.from_item(item)
        except ValidationError as e:
            metrics.add_metric(name='DynamoDBGetItemError', unit=MetricUnit.Count, value=1)
            logger.error('Stored device item is malformed', extra={
                'device_id': device_id,
                'city_id': city_id,
                'error_count': e.error_count(),
                'table_name': self.table_name,
            })
            return StoreError(message=f'Malformed device item: {e.error_count()} invalid attributes', error_code='MALFORMED_ITEM')

        return Found(device=device)

    @tracer.capture_method
    def mutate(self, device_id: str, city_id: str, new_status: DeviceStatus) -> MutateResult:
        """
        Set the status attribute of a device.

        The update is unconditional; concurrent writers resolve as last write wins.

        Args:
            device_id: Device identifier (hash key)
            city_id: City identifier (range key)
            new_status: Status to persist

        Returns:
            Applied or StoreError
        """
        metrics.add_metric(name='DynamoDBUpdateItemCount', unit=MetricUnit.Count, value=1)

        try:
            self.table.update_item(
                Key=self._key(device_id, city_id),
                UpdateExpression=UPDATE_STATUS_EXPRESSION,
                ExpressionAttributeNames={STATUS_ATTRIBUTE_PLACEHOLDER: STATUS_COLUMN_NAME},
                ExpressionAttributeValues={NEW_STATUS_PLACEHOLDER: new_status.value},
            )
        except ClientError as e:
            return self._client_error('UpdateItem', e)
        except BotoCoreError as e:
            return self._connection_error('UpdateItem', e)

        tracer.put_annotation('device_status', new_status.value)
        return Applied()
