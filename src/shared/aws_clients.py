"""AWS client factories.

This module provides centralized AWS client management with:
- Consistent timeouts across all clients
- The solution identifier attached to MediaConvert requests
- Account-specific MediaConvert endpoints
"""

from functools import lru_cache
from typing import Any

import boto3
from botocore.config import Config

from .config import get_settings

# Transport retries are left to botocore's defaults; the job-submit
# function itself never retries.
AWS_CONFIG = Config(
    connect_timeout=5,
    read_timeout=30,
)


@lru_cache(maxsize=1)
def get_s3_client() -> Any:
    """Get cached S3 client.

    Returns:
        boto3 S3 client configured for the current environment
    """
    settings = get_settings()
    return boto3.client(
        "s3",
        region_name=settings.aws_region,
        config=AWS_CONFIG,
    )


def get_mediaconvert_client(endpoint: str | None = None) -> Any:
    """Build a MediaConvert client for an account-specific endpoint.

    MediaConvert requires a custom endpoint URL which varies by account.
    The solution identifier is appended to the user agent so the jobs
    can be attributed to this solution.

    Args:
        endpoint: Endpoint URL; defaults to MEDIACONVERT_ENDPOINT

    Returns:
        boto3 MediaConvert client
    """
    settings = get_settings()
    config = AWS_CONFIG
    if settings.solution_identifier:
        config = AWS_CONFIG.merge(Config(user_agent_extra=settings.solution_identifier))

    return boto3.client(
        "mediaconvert",
        region_name=settings.aws_region,
        endpoint_url=endpoint or settings.mediaconvert_endpoint or None,
        config=config,
    )


@lru_cache(maxsize=1)
def get_sns_client() -> Any:
    """Get cached SNS client.

    Uses REGION when set, otherwise the Lambda's own region.

    Returns:
        boto3 SNS client for notifications
    """
    settings = get_settings()
    return boto3.client(
        "sns",
        region_name=settings.sns_region,
        config=AWS_CONFIG,
    )


def clear_client_cache() -> None:
    """Clear all cached AWS clients.

    Useful for testing when mocking needs to be reset.
    """
    get_s3_client.cache_clear()
    get_sns_client.cache_clear()
