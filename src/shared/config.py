"""Environment-aware configuration with validation.

This module provides centralized configuration management using Pydantic Settings.
The values are the ones the job-submit Lambda receives from its CloudFormation
stack; they are validated at startup to fail fast on misconfigurations.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings are cached to avoid repeated parsing.

    Example:
        >>> settings = get_settings()
        >>> print(settings.job_settings)
        'job-settings.json'
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_REGION",
        description="AWS region the Lambda runs in (used for console links)",
    )
    region: str = Field(
        default="",
        alias="REGION",
        description="Region for the SNS client (falls back to AWS_REGION)",
    )

    # MediaConvert Configuration
    mediaconvert_endpoint: str = Field(
        default="",
        alias="MEDIACONVERT_ENDPOINT",
        description="Account-specific MediaConvert API endpoint URL",
    )
    mediaconvert_role: str = Field(
        default="",
        alias="MEDIACONVERT_ROLE",
        description="IAM role ARN MediaConvert assumes to run the job",
    )

    # S3 Configuration
    job_settings: str = Field(
        default="job-settings.json",
        alias="JOB_SETTINGS",
        description="Name of the job settings file next to the source video",
    )
    destination_bucket: str = Field(
        default="",
        alias="DESTINATION_BUCKET",
        description="S3 bucket for transcoded outputs",
    )

    # Solution identification
    solution_id: str = Field(
        default="",
        alias="SOLUTION_ID",
        description="Solution id recorded in the job's user metadata",
    )
    solution_identifier: str = Field(
        default="",
        alias="SOLUTION_IDENTIFIER",
        description="Tag appended to the MediaConvert client user agent",
    )
    stack_name: str = Field(
        default="vod-foundation",
        alias="STACKNAME",
        description="CloudFormation stack name, used in metadata and alerts",
    )

    # SNS
    sns_topic_arn: str = Field(
        default="",
        alias="SNS_TOPIC_ARN",
        description="SNS topic for job-submit failure alerts",
    )

    # Catalog callback
    catalog_endpoint: str = Field(
        default="",
        alias="CATALOG_ENDPOINT",
        description="Media catalog URL notified of submitted jobs (empty disables)",
    )
    catalog_timeout_seconds: float = Field(
        default=10.0,
        ge=1.0,
        le=60.0,
        alias="CATALOG_TIMEOUT_SECONDS",
        description="Timeout for the catalog callback request",
    )
    catalog_failure_fatal: bool = Field(
        default=False,
        alias="CATALOG_FAILURE_FATAL",
        description="Raise when the catalog callback fails instead of logging it",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    @field_validator("mediaconvert_endpoint", "catalog_endpoint", mode="before")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Ensure service endpoints are valid URLs."""
        if v and not v.startswith(("https://", "http://")):
            raise ValueError("Endpoint must start with https:// or http://")
        return v

    @field_validator("mediaconvert_role", "sns_topic_arn", mode="before")
    @classmethod
    def validate_arn_format(cls, v: str) -> str:
        """Validate ARN format."""
        if v and not v.startswith("arn:aws"):
            raise ValueError("Invalid ARN format - must start with 'arn:aws'")
        return v

    @property
    def sns_region(self) -> str:
        """Region for the SNS client."""
        return self.region or self.aws_region


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached for the lifetime of the process.
    This is safe for Lambda because each invocation gets a fresh process
    or reuses a warm container with the same settings.

    Returns:
        Validated Settings instance

    Raises:
        ValidationError: If environment variables are invalid
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when environment variables change.
    """
    get_settings.cache_clear()
