"""
Device Read Handler - Lambda function returning a device.

Direct invocation with ``{"deviceId": ..., "cityId": ...}``. The device is
returned unless the request is invalid, the device does not exist or its city
is disabled.
"""

from typing import Any, Dict

from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from city_devices.dal import get_device_store
from city_devices.handlers.utils.observability import logger, metrics, tracer
from city_devices.handlers.utils.responses import internal_error_response
from city_devices.logic.pipeline import DevicePipeline, PipelineMode

read_pipeline = DevicePipeline(mode=PipelineMode.READ)


@tracer.capture_lambda_handler
@logger.inject_lambda_context
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Args:
        event: Request payload
        context: Lambda context object

    Returns:
        Device fields with statusCode 200, or statusCode and errorMessage
    """
    try:
        metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)

        response = read_pipeline.run(event, get_device_store())
        return response.to_payload()

    except Exception as e:
        metrics.add_metric(name='ErrorCount', unit=MetricUnit.Count, value=1)
        logger.exception('Unhandled error in lambda handler', extra={'error': str(e)})
        return internal_error_response().to_payload()
