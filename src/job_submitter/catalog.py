"""Media catalog callback.

Tells the media catalog backend which MediaConvert job was created for which
source file, so it can match the job's completion events to the asset.

Request:
    - Method: POST
    - Content-Type: application/json
    - Body: {"awsJobId": "...", "resourceFileName": "..."}
"""

import json
import ssl
import urllib.request
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError, URLError

from aws_lambda_powertools import Logger

from ..shared.exceptions import CatalogNotificationError
from ..shared.models import SubmissionRecord

logger = Logger(service="job-submitter", child=True)


class CatalogClient:
    """Posts submission records to the media catalog."""

    def __init__(self, endpoint: str, timeout: float = 10.0) -> None:
        self.endpoint = endpoint
        self.timeout = timeout

    def notify(self, record: SubmissionRecord) -> dict[str, Any]:
        """Send a submission record to the catalog.

        Args:
            record: Job accepted by MediaConvert

        Returns:
            Status code and (truncated) response body

        Raises:
            CatalogNotificationError: If the request fails or is rejected
        """
        payload = json.dumps(record.to_catalog_payload()).encode("utf-8")
        request = urllib.request.Request(
            self.endpoint,
            data=payload,
            headers={"Content-Type": "application/json"},
            method="POST",
        )

        try:
            ssl_context = ssl.create_default_context()
            with urllib.request.urlopen(request, context=ssl_context, timeout=self.timeout) as response:
                status_code = response.status
                response_body = response.read().decode("utf-8", errors="replace")[:500]

        except HTTPError as e:
            raise CatalogNotificationError(
                e,
                details={"status_code": e.code, "job_id": record.job_id},
            ) from e

        except (URLError, HTTPException, OSError) as e:
            raise CatalogNotificationError(e, details={"job_id": record.job_id}) from e

        except Exception as e:
            raise CatalogNotificationError(e, details={"job_id": record.job_id}) from e

        logger.info(
            "Media catalog notified",
            extra={
                "catalog_endpoint": self.endpoint,
                "status_code": status_code,
                "job_id": record.job_id,
            },
        )

        return {"status_code": status_code, "response": response_body}
