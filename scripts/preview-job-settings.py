#!/usr/bin/env python3
"""Preview the MediaConvert job built from a job settings file.

This script validates a local job-settings.json file and prints the job the
job-submit Lambda would send to MediaConvert for a given source video. No AWS
calls are made.

Usage:
    python scripts/preview-job-settings.py --file job-settings.json --source s3://source-bucket/uploads/video.mp4 --destination-bucket output-bucket --role arn:aws:iam::123456789012:role/MediaConvertRole

    # Print only the output group destinations
    python scripts/preview-job-settings.py --file job-settings.json --source s3://source-bucket/uploads/video.mp4 --destination-bucket output-bucket --role arn:aws:iam::123456789012:role/MediaConvertRole --destinations-only
"""

import argparse
import json
import sys
import uuid
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.job_submitter.settings_transformer import update_job_settings  # noqa: E402
from src.job_submitter.template_loader import parse_job_template  # noqa: E402
from src.shared.exceptions import TranscodingPipelineError  # noqa: E402
from src.shared.models import OutputGroupType  # noqa: E402
from src.shared.paths import strip_extension  # noqa: E402


def destination_prefix(source: str, destination_bucket: str) -> str:
    """Output prefix the Lambda uses for a source video."""
    if not source.startswith("s3://"):
        raise ValueError(f"Source must be an S3 URI: {source}")
    parts = source[len("s3://"):].split("/", 1)
    if len(parts) < 2 or not parts[1]:
        raise ValueError(f"Source must include an object key: {source}")
    key = parts[1]
    return f"s3://{destination_bucket}/{strip_extension(key)}"


def list_destinations(job: dict) -> list[str]:
    """Destinations of all output groups, in template order."""
    destinations = []
    for group in job["Settings"]["OutputGroups"]:
        group_settings = group["OutputGroupSettings"]
        settings_key = OutputGroupType(group_settings["Type"]).settings_key
        destinations.append(group_settings[settings_key]["Destination"])
    return destinations


def main():
    parser = argparse.ArgumentParser(
        description="Preview the MediaConvert job built from a job settings file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--file",
        required=True,
        help="Path to the job-settings.json file",
    )
    parser.add_argument(
        "--source",
        required=True,
        help="S3 URI of the source video",
    )
    parser.add_argument(
        "--destination-bucket",
        required=True,
        help="Output bucket name",
    )
    parser.add_argument(
        "--role",
        required=True,
        help="IAM role ARN for MediaConvert",
    )
    parser.add_argument(
        "--stack-name",
        default="vod-foundation",
        help="Stack name recorded in the job metadata (default: vod-foundation)",
    )
    parser.add_argument(
        "--destinations-only",
        action="store_true",
        help="Print only the output group destinations",
    )

    args = parser.parse_args()

    try:
        body = Path(args.file).read_text(encoding="utf-8")
        template = parse_job_template(body)
        job = update_job_settings(
            template,
            args.source,
            destination_prefix(args.source, args.destination_bucket),
            {"Guid": str(uuid.uuid4()), "StackName": args.stack_name},
            args.role,
        )
    except TranscodingPipelineError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.destinations_only:
        for destination in list_destinations(job):
            print(destination)
    else:
        print(json.dumps(job, indent=2))


if __name__ == "__main__":
    main()
