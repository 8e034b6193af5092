"""Pytest configuration and shared fixtures.

This module provides:
- AWS credential mocking for moto
- Pre-configured AWS service clients
- Sample job settings templates and S3 events
- Environment variable setup
"""

import copy
import json
import os
from dataclasses import dataclass
from typing import Any, Generator

import boto3
import pytest
from moto import mock_aws

# Set dummy AWS credentials BEFORE importing any application code
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"

# Set application environment variables
os.environ["AWS_REGION"] = "us-east-1"
os.environ["MEDIACONVERT_ENDPOINT"] = "https://test.mediaconvert.us-east-1.amazonaws.com"
os.environ["MEDIACONVERT_ROLE"] = "arn:aws:iam::123456789012:role/MediaConvertRole"
os.environ["JOB_SETTINGS"] = "job-settings.json"
os.environ["DESTINATION_BUCKET"] = "test-destination-bucket"
os.environ["SOLUTION_ID"] = "SO0146"
os.environ["SOLUTION_IDENTIFIER"] = "AwsSolution/SO0146/v1.0.0"
os.environ["STACKNAME"] = "vod-test"
os.environ["SNS_TOPIC_ARN"] = "arn:aws:sns:us-east-1:123456789012:vod-test-notifications"
os.environ["LOG_LEVEL"] = "DEBUG"

# Powertools
os.environ["POWERTOOLS_TRACE_DISABLED"] = "true"
os.environ["POWERTOOLS_METRICS_NAMESPACE"] = "VodFoundation"

SOURCE_BUCKET = "test-source-bucket"
TOPIC_NAME = "vod-test-notifications"


# =============================================================================
# AWS Fixtures
# =============================================================================


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture(autouse=True)
def reset_caches() -> Generator[None, None, None]:
    """Drop cached settings and clients between tests."""
    from src.shared.aws_clients import clear_client_cache
    from src.shared.config import clear_settings_cache

    clear_settings_cache()
    clear_client_cache()
    yield
    clear_settings_cache()
    clear_client_cache()


@pytest.fixture
def s3_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Mocked S3 client."""
    with mock_aws():
        yield boto3.client("s3", region_name="us-east-1")


@pytest.fixture
def sns_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Mocked SNS client."""
    with mock_aws():
        yield boto3.client("sns", region_name="us-east-1")


@pytest.fixture
def source_bucket(s3_client: Any) -> str:
    """Create the source bucket."""
    s3_client.create_bucket(Bucket=SOURCE_BUCKET)
    return SOURCE_BUCKET


@pytest.fixture
def sns_topic(sns_client: Any) -> str:
    """Create the notification topic."""
    return sns_client.create_topic(Name=TOPIC_NAME)["TopicArn"]


# =============================================================================
# Sample Data Fixtures
# =============================================================================


SAMPLE_JOB_SETTINGS: dict[str, Any] = {
    "Queue": "arn:aws:mediaconvert:us-east-1:123456789012:queues/Default",
    "UserMetadata": {"Project": "vod"},
    "Settings": {
        "TimecodeConfig": {"Source": "ZEROBASED"},
        "Inputs": [
            {
                "AudioSelectors": {"Audio Selector 1": {"DefaultSelection": "DEFAULT"}},
                "VideoSelector": {},
                "TimecodeSource": "ZEROBASED",
            }
        ],
        "OutputGroups": [
            {
                "Name": "File Group",
                "OutputGroupSettings": {
                    "Type": "FILE_GROUP_SETTINGS",
                    "FileGroupSettings": {},
                },
                "Outputs": [{"ContainerSettings": {"Container": "MP4"}}],
            },
            {
                "Name": "Apple HLS",
                "OutputGroupSettings": {
                    "Type": "HLS_GROUP_SETTINGS",
                    "HlsGroupSettings": {"SegmentLength": 6, "MinSegmentLength": 0},
                },
                "Outputs": [{"ContainerSettings": {"Container": "M3U8"}}],
            },
            {
                "CustomName": "Thumb nails",
                "Name": "File Group",
                "OutputGroupSettings": {
                    "Type": "FILE_GROUP_SETTINGS",
                    "FileGroupSettings": {},
                },
                "Outputs": [{"ContainerSettings": {"Container": "RAW"}}],
            },
        ],
    },
}


@pytest.fixture
def job_settings() -> dict[str, Any]:
    """Job settings template as exported from the MediaConvert console."""
    return copy.deepcopy(SAMPLE_JOB_SETTINGS)


@pytest.fixture
def job_settings_json(job_settings: dict[str, Any]) -> str:
    """Job settings template as uploaded to S3."""
    return json.dumps(job_settings)


@pytest.fixture
def mediaconvert_response() -> dict[str, Any]:
    """CreateJob response for a job built from the sample template."""
    return {
        "Job": {
            "Id": "1700000000000-abc123",
            "Arn": "arn:aws:mediaconvert:us-east-1:123456789012:jobs/1700000000000-abc123",
            "Status": "SUBMITTED",
            "Settings": {
                "Inputs": [{"FileInput": f"s3://{SOURCE_BUCKET}/uploads/Episode 01.mp4"}],
                "OutputGroups": [],
            },
        }
    }


# =============================================================================
# Lambda Fixtures
# =============================================================================


@dataclass
class MockLambdaContext:
    function_name: str = "vod-test-job-submit"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:vod-test-job-submit"
    aws_request_id: str = "test-request-id"
    log_group_name: str = "/aws/lambda/vod-test-job-submit"


@pytest.fixture
def lambda_context() -> MockLambdaContext:
    """Lambda context with the fields Powertools and the handler read."""
    return MockLambdaContext()


@pytest.fixture
def s3_put_event() -> dict:
    """Sample S3 PutObject event for a source video upload."""
    return {
        "Records": [
            {
                "eventVersion": "2.1",
                "eventSource": "aws:s3",
                "awsRegion": "us-east-1",
                "eventTime": "2024-01-15T10:00:00.000Z",
                "eventName": "ObjectCreated:Put",
                "s3": {
                    "bucket": {
                        "name": SOURCE_BUCKET,
                        "arn": f"arn:aws:s3:::{SOURCE_BUCKET}",
                    },
                    "object": {
                        "key": "uploads/Episode+01.mp4",
                        "size": 2048,
                        "eTag": "abc123",
                    },
                },
            }
        ]
    }
