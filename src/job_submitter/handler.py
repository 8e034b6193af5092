"""Lambda handler for submitting MediaConvert jobs.

This Lambda is triggered by S3 PutObject events when a source video is
uploaded to the source bucket.

Flow:
1. Receive S3 event
2. Download the job settings file from the video's top-level folder
3. Bind the settings to the video and the output location
4. Create the MediaConvert job and notify the media catalog
5. On any failure, publish an alert to SNS
"""

import uuid
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import S3Event, event_source
from aws_lambda_powertools.utilities.typing import LambdaContext

from ..notification_handler.notifier import send_error
from ..shared.config import get_settings
from ..shared.exceptions import TranscodingPipelineError
from ..shared.paths import strip_extension
from .settings_transformer import update_job_settings
from .submitter import create_job
from .template_loader import load_job_template

logger = Logger(service="job-submitter")
tracer = Tracer(service="job-submitter")
metrics = Metrics(service="job-submitter", namespace="VodFoundation")


@logger.inject_lambda_context(log_event=True, clear_state=True)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
@event_source(data_class=S3Event)
def handler(event: S3Event, context: LambdaContext) -> dict[str, Any]:
    """Submit a transcoding job for an uploaded source video.

    Args:
        event: S3 PutObject event
        context: Lambda context

    Returns:
        Submission result

    Output structure:
        {
            "status": "SUBMITTED" | "FAILED",
            "job_id": "...",                 # SUBMITTED only
            "resource_file_name": "...",     # SUBMITTED only
            "catalog_notified": true,        # SUBMITTED only
            "error": {...}                   # FAILED only
        }

    Raises:
        NotificationError: If the failure alert itself cannot be published
    """
    settings = get_settings()
    guid = str(uuid.uuid4())
    logger.append_keys(guid=guid)

    try:
        record = event.record
        source_bucket = record.s3.bucket.name
        source_key = record.s3.get_object.key

        job_settings_key = f"{source_key.split('/')[0]}/{settings.job_settings}"
        source_location = f"s3://{source_bucket}/{source_key}"
        destination_prefix = f"s3://{settings.destination_bucket}/{strip_extension(source_key)}"
        metadata = {
            "Guid": guid,
            "StackName": settings.stack_name,
            "SolutionId": settings.solution_id,
        }

        logger.info(
            "Processing source video",
            extra={
                "source_location": source_location,
                "destination_prefix": destination_prefix,
                "job_settings_key": job_settings_key,
            },
        )

        with tracer.provider.in_subsegment("load_job_settings"):
            template = load_job_template(source_bucket, job_settings_key)

        template = update_job_settings(
            template,
            source_location,
            destination_prefix,
            metadata,
            settings.mediaconvert_role,
        )

        with tracer.provider.in_subsegment("create_job"):
            submission = create_job(template, settings.mediaconvert_endpoint)

    except TranscodingPipelineError as e:
        logger.error("Job submit failed", extra={"error": e.to_dict()})
        return _report_failure(e, context, settings)

    except Exception as e:
        logger.exception("Unexpected error submitting job")
        return _report_failure(e, context, settings)

    metrics.add_metadata(key="job_id", value=submission.job_id)
    return {
        "status": "SUBMITTED",
        "job_id": submission.job_id,
        "resource_file_name": submission.resource_file_name,
        "catalog_notified": submission.catalog_notified,
    }


def _report_failure(
    err: Exception,
    context: LambdaContext,
    settings: Any,
) -> dict[str, Any]:
    """Alert on a failed submission.

    The error is not re-raised: the alert is the report, and a failed
    invocation would make S3 deliver the event again.
    """
    metrics.add_metric(name="JobSubmitFailures", unit=MetricUnit.Count, value=1)
    send_error(settings.sns_topic_arn, settings.stack_name, context.log_group_name, err)
    error = err.to_dict() if isinstance(err, TranscodingPipelineError) else {"error_message": str(err)}
    return {"status": "FAILED", "error": error}
