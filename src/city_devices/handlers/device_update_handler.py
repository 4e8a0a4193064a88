"""
Device Update Handler - Lambda function changing a device status.

Direct invocation with ``{"deviceId": ..., "cityId": ..., "deviceOperation": ...}``
where the operation is ACTIVATE or DEACTIVATE. Success returns only the status
code.
"""

from typing import Any, Dict

from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from city_devices.dal import get_device_store
from city_devices.handlers.utils.observability import logger, metrics, tracer
from city_devices.handlers.utils.responses import OK_STATUS_CODE, internal_error_response
from city_devices.logic.pipeline import DevicePipeline, PipelineMode

update_pipeline = DevicePipeline(mode=PipelineMode.WRITE, success_status_code=OK_STATUS_CODE)


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
        statusCode 200 on success, or statusCode and errorMessage
    """
    try:
        metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)

        response = update_pipeline.run(event, get_device_store())
        return response.to_payload()

    except Exception as e:
        metrics.add_metric(name='ErrorCount', unit=MetricUnit.Count, value=1)
        logger.exception('Unhandled error in lambda handler', extra={'error': str(e)})
        return internal_error_response().to_payload()
