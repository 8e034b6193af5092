"""Binds a job settings template to one source video.

The template arrives with placeholder inputs and destinations. This module
points it at the uploaded video, gives every output group its own folder
under the job's output prefix, and fills in the fields the solution owns
(role, acceleration, queue name, user metadata).

Output group folders are named after the group and numbered per group type,
so a template may hold several groups of the same type:

    s3://out/job/AppleHLS1/
    s3://out/job/FileGroup1/
    s3://out/job/FileGroup2/
"""

import re
from dataclasses import dataclass, field
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from ..shared.exceptions import (
    InvalidGroupNameError,
    InvalidGroupTypeError,
    TransformError,
)
from ..shared.models import JobTemplate, OutputGroupType, TransformContext

logger = Logger(service="job-submitter", child=True)

# Enables accelerated transcoding when the source supports it
DEFAULT_ACCELERATION_MODE = "PREFERRED"

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class GroupCounters:
    """Occurrence counters for one transform, one per output group type."""

    counts: dict[OutputGroupType, int] = field(
        default_factory=lambda: {group_type: 0 for group_type in OutputGroupType}
    )

    def next(self, group_type: OutputGroupType) -> int:
        self.counts[group_type] += 1
        return self.counts[group_type]


class SettingsTransformer:
    """Applies a TransformContext to job settings templates."""

    def __init__(self, context: TransformContext) -> None:
        self.context = context

    def transform(self, template: JobTemplate) -> JobTemplate:
        """Bind the template to this job, in place.

        Args:
            template: Validated job settings template

        Returns:
            The same template instance

        Raises:
            TransformError: If any step fails; the cause is kept in
                ``details["error"]``
        """
        logger.info(
            "Updating job settings with the source and destination details",
            extra={
                "source_location": self.context.source_location,
                "destination_prefix": self.context.destination_prefix,
            },
        )

        try:
            settings = template["Settings"]
            source_input = settings["Inputs"][0]
            destinations = plan_destinations(
                settings["OutputGroups"], self.context.destination_prefix
            )

            source_input["FileInput"] = self.context.source_location
            for group, group_type, destination in destinations:
                group_settings = group["OutputGroupSettings"]
                group_settings.setdefault(group_type.settings_key, {})["Destination"] = destination

            if "AccelerationSettings" not in template:
                template["AccelerationSettings"] = DEFAULT_ACCELERATION_MODE

            template["Role"] = self.context.role

            # Only the queue name is accepted, not the ARN
            queue = template.get("Queue")
            if queue and "/" in queue:
                template["Queue"] = queue.split("/")[1]

            template["UserMetadata"] = {
                **(template.get("UserMetadata") or {}),
                **self.context.metadata,
            }
        except Exception as e:
            logger.error("Failed to update job settings", extra={"error": str(e)})
            raise TransformError(e) from e

        return template


def plan_destinations(
    output_groups: list[dict[str, Any]],
    destination_prefix: str,
) -> list[tuple[dict[str, Any], OutputGroupType, str]]:
    """Work out the destination of every output group.

    Nothing is written to the groups, so a bad group leaves the template
    untouched.

    Args:
        output_groups: Settings.OutputGroups of the template
        destination_prefix: Output prefix of the job (no trailing slash)

    Returns:
        (group, group type, destination) for each group, in template order

    Raises:
        InvalidGroupTypeError: If a group type is not recognized
        InvalidGroupNameError: If a group has no usable name
    """
    counters = GroupCounters()
    planned = []

    for index, group in enumerate(output_groups):
        group_type = _group_type(group, index)
        label = group_label(group, index)
        destination = f"{destination_prefix}/{label}{counters.next(group_type)}/"
        planned.append((group, group_type, destination))

    return planned


def group_label(group: dict[str, Any], index: int = 0) -> str:
    """Folder label of an output group: CustomName, else Name, whitespace removed.

    Raises:
        InvalidGroupNameError: If neither name is a non-blank string
    """
    group_settings = group.get("OutputGroupSettings") or {}

    for name_field in ("CustomName", "Name"):
        name = group.get(name_field) or group_settings.get(name_field)
        if isinstance(name, str) and name.strip():
            return _WHITESPACE_RE.sub("", name)

    raise InvalidGroupNameError(details={"output_group_index": index})


def _group_type(group: dict[str, Any], index: int) -> OutputGroupType:
    group_type = (group.get("OutputGroupSettings") or {}).get("Type")
    try:
        return OutputGroupType(group_type)
    except ValueError:
        raise InvalidGroupTypeError(
            details={"output_group_index": index, "type": group_type}
        ) from None


def update_job_settings(
    template: JobTemplate,
    source_location: str,
    destination_prefix: str,
    metadata: dict[str, str],
    role: str,
) -> JobTemplate:
    """Bind a job settings template to a source video and output prefix.

    Args:
        template: Validated job settings template (modified in place)
        source_location: S3 URI of the source video
        destination_prefix: S3 URI prefix for the job's outputs
        metadata: User metadata to merge into the job; wins on conflicts
        role: IAM role ARN for MediaConvert

    Returns:
        The updated template

    Raises:
        TransformError: If the template cannot be updated
    """
    try:
        context = TransformContext(
            source_location=source_location,
            destination_prefix=destination_prefix,
            metadata=metadata,
            role=role,
        )
    except ValidationError as e:
        raise TransformError(e) from e

    return SettingsTransformer(context).transform(template)
