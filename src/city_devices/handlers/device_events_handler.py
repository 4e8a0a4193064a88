"""
Device Events Handler - EventBridge triggered device status changes.

The request travels in the event ``detail``. The pipeline runs in its async
shape, with store calls awaited on the default executor. Success returns
statusCode 204.
"""

import asyncio
from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import EventBridgeEvent
from aws_lambda_powertools.utilities.typing import LambdaContext

from city_devices.dal import get_async_device_store
from city_devices.handlers.utils.observability import logger, metrics, tracer
from city_devices.handlers.utils.responses import NO_CONTENT_STATUS_CODE, internal_error_response
from city_devices.logic.pipeline import DevicePipeline, PipelineMode
from city_devices.logic.request_validator import event_detail_validator

event_pipeline = DevicePipeline(
    mode=PipelineMode.WRITE,
    validator=event_detail_validator,
    success_status_code=NO_CONTENT_STATUS_CODE,
)


async def process_event(event: EventBridgeEvent) -> Dict[str, Any]:
    """
    Run the write pipeline on the request carried by an EventBridge event.

    Args:
        event: EventBridge event wrapper

    Returns:
        statusCode 204 on success, or statusCode and errorMessage
    """
    logger.info('Processing device event', extra={
        'detail_type': event.get('detail-type'),
        'event_source': event.get('source'),
    })

    response = await event_pipeline.run_async(event.get('detail'), get_async_device_store())
    return response.to_payload()


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.EVENT_BRIDGE, clear_state=True)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler for device events.

    Args:
        event: EventBridge event payload
        context: Lambda context object

    Returns:
        statusCode 204 on success, or statusCode and errorMessage
    """
    try:
        metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)

        if not isinstance(event, dict):
            logger.warning('Event is not an EventBridge envelope', extra={'event_type': type(event).__name__})
            event = {}

        bridge_event = EventBridgeEvent(event)
        logger.append_keys(event_source=bridge_event.get('source'), event_id=bridge_event.get('id'))

        return asyncio.run(process_event(bridge_event))

    except Exception as e:
        metrics.add_metric(name='ErrorCount', unit=MetricUnit.Count, value=1)
        logger.exception('Unhandled error in lambda handler', extra={'error': str(e)})
        return internal_error_response().to_payload()
