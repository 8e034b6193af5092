"""MediaConvert job creation.

Submits a finalized job settings template and reports the new job to the
media catalog. Nothing is retried here: a failed CreateJob call is logged
and raised to the caller, which sends the failure alert.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics
from aws_lambda_powertools.metrics import MetricUnit
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.aws_clients import get_mediaconvert_client
from ..shared.config import get_settings
from ..shared.exceptions import CatalogNotificationError, JobSubmissionError
from ..shared.models import JobTemplate, SubmissionRecord
from ..shared.paths import base_name
from .catalog import CatalogClient

logger = Logger(service="job-submitter", child=True)
metrics = Metrics(namespace="VodFoundation", service="job-submitter")


class JobSubmitter:
    """Creates MediaConvert jobs and reports them to the media catalog.

    Args:
        mediaconvert_client: boto3 MediaConvert client for the account endpoint
        catalog: Catalog callback client; None disables the callback
        catalog_failure_fatal: Raise CatalogNotificationError when the
            callback fails instead of logging it
    """

    def __init__(
        self,
        mediaconvert_client: Any,
        catalog: CatalogClient | None = None,
        catalog_failure_fatal: bool = False,
    ) -> None:
        self.mediaconvert = mediaconvert_client
        self.catalog = catalog
        self.catalog_failure_fatal = catalog_failure_fatal

    def submit(self, template: JobTemplate) -> SubmissionRecord:
        """Create a MediaConvert job from a finalized template.

        Args:
            template: Job settings bound to the source video

        Returns:
            SubmissionRecord for the new job

        Raises:
            JobSubmissionError: If MediaConvert rejects the job
            CatalogNotificationError: If the catalog callback fails and
                catalog failures are configured as fatal
        """
        try:
            response = self.mediaconvert.create_job(**build_create_job_request(template))
        except (ClientError, BotoCoreError) as e:
            logger.exception("MediaConvert CreateJob failed")
            metrics.add_metric(name="JobSubmissionErrors", unit=MetricUnit.Count, value=1)
            raise JobSubmissionError(e) from e

        job = response["Job"]
        record = SubmissionRecord(
            job_id=job["Id"],
            resource_file_name=base_name(_job_file_input(job, template)),
        )

        logger.info(
            "Job submitted to MediaConvert",
            extra={"job_id": record.job_id, "job": template},
        )
        metrics.add_metric(name="JobsSubmitted", unit=MetricUnit.Count, value=1)

        self._notify_catalog(record)
        return record

    def _notify_catalog(self, record: SubmissionRecord) -> None:
        if self.catalog is None:
            logger.info("No catalog endpoint configured, skipping catalog callback")
            return

        try:
            self.catalog.notify(record)
        except CatalogNotificationError as e:
            # The job is already running in MediaConvert
            logger.error(
                "Media catalog callback failed",
                extra={"error": e.to_dict(), "job_id": record.job_id},
            )
            metrics.add_metric(name="CatalogNotificationFailures", unit=MetricUnit.Count, value=1)
            if self.catalog_failure_fatal:
                raise
            return

        record.catalog_notified = True


def build_create_job_request(template: JobTemplate) -> dict[str, Any]:
    """Convert a job template into CreateJob keyword arguments.

    Job settings files carry AccelerationSettings as the bare mode string;
    the API expects ``{"Mode": ...}``.
    """
    request = dict(template)
    acceleration = request.get("AccelerationSettings")
    if isinstance(acceleration, str):
        request["AccelerationSettings"] = {"Mode": acceleration}
    return request


def _job_file_input(job: dict[str, Any], template: JobTemplate) -> str:
    settings = job.get("Settings") or template["Settings"]
    return settings["Inputs"][0]["FileInput"]


def create_job(template: JobTemplate, endpoint: str) -> SubmissionRecord:
    """Create a MediaConvert job using the configured clients.

    Args:
        template: Finalized job settings
        endpoint: Account-specific MediaConvert endpoint URL

    Returns:
        SubmissionRecord for the new job
    """
    settings = get_settings()
    catalog = None
    if settings.catalog_endpoint:
        catalog = CatalogClient(settings.catalog_endpoint, timeout=settings.catalog_timeout_seconds)

    submitter = JobSubmitter(
        mediaconvert_client=get_mediaconvert_client(endpoint),
        catalog=catalog,
        catalog_failure_fatal=settings.catalog_failure_fatal,
    )
    return submitter.submit(template)
