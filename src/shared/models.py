"""Pydantic models for data validation and serialization.

This module defines the data structures used by the job-submit function:
- Output group types recognized in job settings files
- The per-job transform context
- The submission record reported to the media catalog

The job template itself stays a plain dictionary: it is the MediaConvert
CreateJob request and is passed through to the service as-is.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# MediaConvert CreateJob request document
JobTemplate = dict[str, Any]


class OutputGroupType(str, Enum):
    """MediaConvert output group types supported in job settings files."""

    FILE = "FILE_GROUP_SETTINGS"
    HLS = "HLS_GROUP_SETTINGS"
    DASH = "DASH_ISO_GROUP_SETTINGS"
    MS_SMOOTH = "MS_SMOOTH_GROUP_SETTINGS"
    CMAF = "CMAF_GROUP_SETTINGS"

    @property
    def settings_key(self) -> str:
        """Key of the type-specific settings object holding the Destination."""
        return _SETTINGS_KEYS[self]


_SETTINGS_KEYS: dict[OutputGroupType, str] = {
    OutputGroupType.FILE: "FileGroupSettings",
    OutputGroupType.HLS: "HlsGroupSettings",
    OutputGroupType.DASH: "DashIsoGroupSettings",
    OutputGroupType.MS_SMOOTH: "MsSmoothGroupSettings",
    OutputGroupType.CMAF: "CmafGroupSettings",
}


class TransformContext(BaseModel):
    """Per-job values bound into a job settings template.

    Lives for the duration of one job preparation only.
    """

    model_config = ConfigDict(frozen=True)

    source_location: str = Field(
        min_length=1,
        description="S3 URI of the source video (e.g., 's3://bucket/folder/video.mp4')",
    )
    destination_prefix: str = Field(
        min_length=1,
        description="S3 URI prefix the output groups are written under",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="User metadata merged into the job's UserMetadata",
    )
    role: str = Field(
        description="IAM role ARN MediaConvert assumes to run the job",
    )


class SubmissionRecord(BaseModel):
    """Minimal record of a job accepted by MediaConvert.

    Sent to the media catalog; never persisted or retried.
    """

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(
        alias="awsJobId",
        description="MediaConvert job ID",
    )
    resource_file_name: str = Field(
        alias="resourceFileName",
        description="File name of the job's source video",
    )
    catalog_notified: bool = Field(
        default=False,
        exclude=True,
        description="Whether the media catalog acknowledged the job",
    )

    def to_catalog_payload(self) -> dict[str, str]:
        """Body of the media catalog callback."""
        return self.model_dump(by_alias=True)
