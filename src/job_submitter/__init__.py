"""Job submitter module for the VOD job-submit function.

This module handles MediaConvert job creation:
- Job settings download and validation
- Binding settings to a source video
- Job creation and media catalog callback
- Lambda handler
"""

from .template_loader import TemplateLoader, load_job_template, parse_job_template
from .settings_transformer import (
    DEFAULT_ACCELERATION_MODE,
    SettingsTransformer,
    update_job_settings,
)
from .submitter import JobSubmitter, create_job
from .catalog import CatalogClient

__all__ = [
    "TemplateLoader",
    "load_job_template",
    "parse_job_template",
    "DEFAULT_ACCELERATION_MODE",
    "SettingsTransformer",
    "update_job_settings",
    "JobSubmitter",
    "create_job",
    "CatalogClient",
]
