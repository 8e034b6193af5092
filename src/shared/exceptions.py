"""Custom exception hierarchy for the job-submit function.

All job-submit exceptions inherit from TranscodingPipelineError,
enabling consistent error handling and structured error responses.

Each stage collapses its internal failures into one outward error that
carries a remediation hint and the original error text, so callers see a
single taxonomy regardless of the root cause.

Exception hierarchy:
    TranscodingPipelineError (base)
    ├── TemplateLoadError
    │   ├── TemplateFetchError
    │   └── TemplateValidationError
    ├── TransformError
    │   ├── InvalidGroupTypeError
    │   └── InvalidGroupNameError
    ├── JobSubmissionError
    ├── CatalogNotificationError
    └── NotificationError
"""

from typing import Any

CUSTOM_SETTINGS_DOCS = "https://github.com/awslabs/video-on-demand-on-aws-foundations"


class TranscodingPipelineError(Exception):
    """Base exception for all job-submit errors.

    Provides structured error information suitable for logging,
    CloudWatch metrics, and SNS notifications.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for metrics/filtering
        details: Additional context as key-value pairs
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize pipeline error.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (e.g., 'TRANSFORM_ERROR')
            details: Additional context for debugging
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary with error_code, error_message, and details.
            Note: Uses 'error_message' instead of 'message' to avoid conflicts
            with Python's logging module which reserves 'message' internally.
        """
        return {
            "error_code": self.error_code,
            "error_message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.error_code!r}, {self.message!r})"


class _WrappingError(TranscodingPipelineError):
    """Outward error that keeps the underlying exception as context."""

    default_message = "Job submit failed."
    default_code = "PIPELINE_ERROR"

    def __init__(
        self,
        original_error: Exception | None = None,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        if original_error is not None:
            error_details["error"] = _error_text(original_error)
            error_details["error_type"] = type(original_error).__name__

        super().__init__(message or self.default_message, self.default_code, error_details)
        self.original_error = original_error

    @property
    def error(self) -> str | None:
        """Text of the original error, if any."""
        return self.details.get("error")


def _error_text(error: Exception) -> str:
    """Error text including the root cause of nested wrapping errors."""
    if isinstance(error, _WrappingError) and error.error:
        return f"{error.message} {error.error}"
    return str(error)


class TemplateLoadError(_WrappingError):
    """Raised when the job settings file cannot be downloaded or validated."""

    default_message = (
        "Failed to download and validate the job-settings.json file. "
        "Please check its contents and location. "
        f"Details on using custom settings: {CUSTOM_SETTINGS_DOCS}"
    )
    default_code = "TEMPLATE_LOAD_ERROR"


class TemplateFetchError(TemplateLoadError):
    """The object store read failed."""

    default_message = "Failed to read the job settings file from S3."
    default_code = "TEMPLATE_FETCH_ERROR"


class TemplateValidationError(TemplateLoadError):
    """The job settings document is not a valid single-input template.

    This covers:
    - Content that is not JSON
    - Missing Settings
    - More than one input
    """

    default_message = "Invalid settings file in s3."
    default_code = "TEMPLATE_VALIDATION_ERROR"


class TransformError(_WrappingError):
    """Raised when the template cannot be bound to this job."""

    default_message = (
        "Failed to update the job-settings.json file. "
        f"Details on using custom settings: {CUSTOM_SETTINGS_DOCS}"
    )
    default_code = "TRANSFORM_ERROR"


class InvalidGroupTypeError(TransformError):
    """OutputGroupSettings.Type is not a recognized output group type."""

    default_message = (
        "OutputGroupSettings.Type is not a valid type. "
        "Please check your job settings file."
    )
    default_code = "INVALID_GROUP_TYPE_ERROR"


class InvalidGroupNameError(TransformError):
    """Neither CustomName nor Name gives a usable output group label."""

    default_message = (
        "Cannot validate group name in job.Settings.OutputGroups. "
        "Please check your job settings file."
    )
    default_code = "INVALID_GROUP_NAME_ERROR"


class JobSubmissionError(_WrappingError):
    """Raised when MediaConvert job submission fails.

    This covers:
    - API errors from MediaConvert
    - Invalid job settings rejected by the service
    - Queue issues
    - IAM permission errors
    """

    default_message = "Failed to create the MediaConvert job."
    default_code = "JOB_SUBMISSION_ERROR"


class CatalogNotificationError(_WrappingError):
    """Raised when the media catalog could not be told about a submitted job.

    The MediaConvert job exists at this point; only the callback failed.
    """

    default_message = "MediaConvert job was created but the media catalog callback failed."
    default_code = "CATALOG_NOTIFICATION_ERROR"


class NotificationError(_WrappingError):
    """Raised when the failure alert could not be published to SNS."""

    default_message = "Failed to publish the job-submit failure notification."
    default_code = "NOTIFICATION_ERROR"
