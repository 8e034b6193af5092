"""Job settings template download and validation.

The job settings file is a MediaConvert CreateJob request exported from the
console (or written by hand) and uploaded next to the source videos. Only a
structural check is done here; MediaConvert validates the encoding settings
when the job is created.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.aws_clients import get_s3_client
from ..shared.exceptions import (
    TemplateFetchError,
    TemplateLoadError,
    TemplateValidationError,
)
from ..shared.models import JobTemplate

logger = Logger(service="job-submitter", child=True)


class TemplateLoader:
    """Downloads job settings templates from S3."""

    def __init__(self, s3_client: Any | None = None) -> None:
        self._s3 = s3_client

    @property
    def s3(self) -> Any:
        if self._s3 is None:
            self._s3 = get_s3_client()
        return self._s3

    def load(self, bucket: str, key: str) -> JobTemplate:
        """Download and validate a job settings template.

        Args:
            bucket: S3 bucket holding the settings file
            key: S3 key of the settings file

        Returns:
            Parsed job template

        Raises:
            TemplateLoadError: If the file cannot be read or is not a valid
                single-input job template. The underlying error text is kept
                in ``details["error"]``.
        """
        logger.info(
            "Downloading job settings file",
            extra={"bucket": bucket, "key": key},
        )

        try:
            body = self._read(bucket, key)
            template = parse_job_template(body)
        except (TemplateFetchError, TemplateValidationError) as e:
            logger.error(
                "Job settings file rejected",
                extra={"bucket": bucket, "key": key, "error": e.to_dict()},
            )
            raise TemplateLoadError(e) from e

        return template

    def _read(self, bucket: str, key: str) -> bytes:
        try:
            response = self.s3.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            raise TemplateFetchError(e) from e


def parse_job_template(body: str | bytes) -> JobTemplate:
    """Parse and structurally validate a job settings document.

    Args:
        body: JSON text of the settings file, raw bytes are read as UTF-8

    Returns:
        Parsed job template

    Raises:
        TemplateValidationError: If the document is not UTF-8 JSON, has no
            Settings, or declares more than one input
    """
    try:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        template = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TemplateValidationError(e) from e

    if not isinstance(template, dict):
        raise TemplateValidationError(
            message="Invalid settings file in s3: expected a JSON object.",
        )

    if "Settings" not in template:
        raise TemplateValidationError(
            message="Invalid settings file in s3: missing Settings.",
        )

    # Only single-input jobs are supported
    settings = template["Settings"]
    for inputs in (
        template.get("Inputs"),
        settings.get("Inputs") if isinstance(settings, dict) else None,
    ):
        if inputs is None:
            continue
        if not isinstance(inputs, list):
            raise TemplateValidationError(
                message="Invalid settings file in s3: Inputs must be a list.",
            )
        if len(inputs) > 1:
            raise TemplateValidationError(
                message="Invalid settings file in s3: only one input is supported.",
                details={"input_count": len(inputs)},
            )

    return template


def load_job_template(bucket: str, key: str) -> JobTemplate:
    """Download and validate a job settings template with the default S3 client."""
    return TemplateLoader().load(bucket, key)
