"""Job-submit failure alerts.

Publishes an SNS message for every job that could not be submitted. This is
the last place a failure is reported, so a failed publish is logged and
raised rather than dropped.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics
from aws_lambda_powertools.metrics import MetricUnit
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.aws_clients import get_sns_client
from ..shared.config import get_settings
from ..shared.exceptions import NotificationError
from .formatters import format_error_message, format_error_subject

logger = Logger(service="job-submitter", child=True)
metrics = Metrics(namespace="VodFoundation", service="job-submitter")


class FailureNotifier:
    """Publishes failure alerts to an SNS topic."""

    def __init__(self, sns_client: Any | None = None, region: str | None = None) -> None:
        self._sns = sns_client
        self.region = region

    @property
    def sns(self) -> Any:
        if self._sns is None:
            self._sns = get_sns_client()
        return self._sns

    def notify(
        self,
        topic_arn: str,
        stack_name: str,
        log_group_name: str,
        err: BaseException | str,
    ) -> str:
        """Publish a failure alert.

        Args:
            topic_arn: SNS topic to publish to
            stack_name: Stack name used in the subject line
            log_group_name: Log group of the failed invocation
            err: The failure being reported

        Returns:
            SNS message ID

        Raises:
            NotificationError: If the alert cannot be published
        """
        logger.info("Sending SNS error notification", extra={"error": str(err)})

        region = self.region or get_settings().aws_region
        try:
            response = self.sns.publish(
                TargetArn=topic_arn,
                Message=format_error_message(region, log_group_name, err),
                Subject=format_error_subject(stack_name),
            )
        except (ClientError, BotoCoreError) as e:
            logger.exception("Failed to publish error notification", extra={"topic_arn": topic_arn})
            raise NotificationError(e, details={"topic_arn": topic_arn}) from e

        metrics.add_metric(name="ErrorNotificationsSent", unit=MetricUnit.Count, value=1)
        logger.info(
            "Error notification sent",
            extra={"message_id": response["MessageId"], "topic_arn": topic_arn},
        )
        return response["MessageId"]


def send_error(
    topic_arn: str,
    stack_name: str,
    log_group_name: str,
    err: BaseException | str,
) -> str:
    """Publish a failure alert with the default SNS client."""
    return FailureNotifier().notify(topic_arn, stack_name, log_group_name, err)
