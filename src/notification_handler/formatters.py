"""Message formatters for failure alerts."""

import json
from typing import Any
from urllib.parse import quote

from ..shared.exceptions import TranscodingPipelineError

# SNS rejects subjects longer than 100 characters
SNS_SUBJECT_LIMIT = 100


def format_log_link(region: str, log_group_name: str) -> str:
    """Deep link to a log group in the CloudWatch console.

    Args:
        region: AWS region of the log group
        log_group_name: CloudWatch log group (e.g., '/aws/lambda/job-submit')

    Returns:
        Console URL
    """
    return (
        f"https://console.aws.amazon.com/cloudwatch/home?region={region}"
        f"#logStream:group={quote(log_group_name, safe='/')}"
    )


def format_error(err: BaseException | str) -> Any:
    """JSON-friendly form of an error.

    Pipeline errors keep their code and details; anything else is
    stringified.
    """
    if isinstance(err, TranscodingPipelineError):
        return err.to_dict()
    return str(err)


def format_error_message(region: str, log_group_name: str, err: BaseException | str) -> str:
    """Format the body of a job-submit failure alert.

    Returns:
        Indented JSON with the log link under ``Details`` and the error
        under ``Error``
    """
    message = {
        "Details": format_log_link(region, log_group_name),
        "Error": format_error(err),
    }
    return json.dumps(message, indent=2, default=str)


def format_error_subject(stack_name: str) -> str:
    """Subject line of a job-submit failure alert."""
    return f"{stack_name}: Encoding Job Submit Failed"[:SNS_SUBJECT_LIMIT]
