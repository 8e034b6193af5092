"""Unit tests for configuration and AWS client setup."""

import pytest
from pydantic import ValidationError

from src.shared.aws_clients import get_mediaconvert_client, get_sns_client
from src.shared.config import Settings, get_settings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_settings_from_environment(self):
        """Test that the Lambda environment variables are read."""
        settings = get_settings()

        assert settings.mediaconvert_endpoint == "https://test.mediaconvert.us-east-1.amazonaws.com"
        assert settings.mediaconvert_role == "arn:aws:iam::123456789012:role/MediaConvertRole"
        assert settings.destination_bucket == "test-destination-bucket"
        assert settings.stack_name == "vod-test"
        assert settings.catalog_failure_fatal is False

    def test_settings_cached(self):
        """Test that settings are parsed once."""
        assert get_settings() is get_settings()

    def test_sns_region_falls_back_to_aws_region(self, monkeypatch: pytest.MonkeyPatch):
        """Test the SNS client region."""
        monkeypatch.delenv("REGION", raising=False)
        assert get_settings().sns_region == "us-east-1"

    def test_sns_region_override(self, monkeypatch: pytest.MonkeyPatch):
        """Test that REGION overrides the SNS client region."""
        monkeypatch.setenv("REGION", "eu-west-1")
        assert get_settings().sns_region == "eu-west-1"

    def test_invalid_endpoint(self, monkeypatch: pytest.MonkeyPatch):
        """Test that a malformed MediaConvert endpoint is rejected."""
        monkeypatch.setenv("MEDIACONVERT_ENDPOINT", "abc.mediaconvert.us-east-1.amazonaws.com")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_role_arn(self, monkeypatch: pytest.MonkeyPatch):
        """Test that a malformed role ARN is rejected."""
        monkeypatch.setenv("MEDIACONVERT_ROLE", "MediaConvertRole")
        with pytest.raises(ValidationError):
            Settings()

    def test_catalog_failure_fatal_flag(self, monkeypatch: pytest.MonkeyPatch):
        """Test parsing the catalog failure policy."""
        monkeypatch.setenv("CATALOG_FAILURE_FATAL", "true")
        assert Settings().catalog_failure_fatal is True


class TestAwsClients:
    """Tests for AWS client factories."""

    def test_mediaconvert_client_endpoint_and_user_agent(self):
        """Test that the endpoint and solution identifier are applied."""
        client = get_mediaconvert_client("https://abc123.mediaconvert.us-east-1.amazonaws.com")

        assert client.meta.endpoint_url == "https://abc123.mediaconvert.us-east-1.amazonaws.com"
        assert client.meta.config.user_agent_extra == "AwsSolution/SO0146/v1.0.0"

    def test_mediaconvert_client_default_endpoint(self):
        """Test that MEDIACONVERT_ENDPOINT is used when no endpoint is given."""
        client = get_mediaconvert_client()

        assert client.meta.endpoint_url == "https://test.mediaconvert.us-east-1.amazonaws.com"

    def test_sns_client_region(self, monkeypatch: pytest.MonkeyPatch):
        """Test that the SNS client uses REGION."""
        monkeypatch.setenv("REGION", "eu-west-1")

        assert get_sns_client().meta.region_name == "eu-west-1"
