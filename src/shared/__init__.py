"""Shared utilities for the VOD job-submit function."""

from .config import Settings, get_settings
from .exceptions import (
    TranscodingPipelineError,
    TemplateLoadError,
    TemplateFetchError,
    TemplateValidationError,
    TransformError,
    InvalidGroupTypeError,
    InvalidGroupNameError,
    JobSubmissionError,
    CatalogNotificationError,
    NotificationError,
)
from .models import (
    JobTemplate,
    OutputGroupType,
    TransformContext,
    SubmissionRecord,
)
from .paths import base_name, strip_extension

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "TranscodingPipelineError",
    "TemplateLoadError",
    "TemplateFetchError",
    "TemplateValidationError",
    "TransformError",
    "InvalidGroupTypeError",
    "InvalidGroupNameError",
    "JobSubmissionError",
    "CatalogNotificationError",
    "NotificationError",
    # Models
    "JobTemplate",
    "OutputGroupType",
    "TransformContext",
    "SubmissionRecord",
    # Paths
    "base_name",
    "strip_extension",
]
