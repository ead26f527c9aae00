"""
Upload of an exported spreadsheet to an automation webhook.
The file is sent as multipart form data, optionally with an ISO-8601 date field.
"""

from typing import Optional
from datetime import date
from pathlib import Path
import logging

import requests

from models.export_result import UploadResult

logger = logging.getLogger(__name__)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def upload_file(
    file_path: str,
    url: str,
    upload_date: Optional[date] = None,
    file_field: str = "file",
    date_field: str = "date",
    timeout: float = 60
) -> UploadResult:
    """
    POST a file to a webhook.

    Network and HTTP errors are reported in the result, never raised: the
    exported file stays valid whatever happens here.

    Args:
        file_path: File to upload
        url: Webhook endpoint
        upload_date: Date sent as ISO-8601 form field (omitted if None)
        file_field: Form field name for the file
        date_field: Form field name for the date
        timeout: Request timeout in seconds

    Returns:
        UploadResult
    """
    if not url:
        return UploadResult(success=False, url='', message="No upload URL configured")

    path = Path(file_path)
    data = {}
    if upload_date is not None:
        data[date_field] = upload_date.isoformat()

    logger.info(f"Uploading {path.name} to {url}")
    try:
        with open(path, 'rb') as f:
            response = requests.post(
                url,
                files={file_field: (path.name, f, XLSX_MIME)},
                data=data,
                timeout=timeout,
            )
        response.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        logger.error(f"Upload rejected by {url}: {e}")
        return UploadResult(success=False, url=url, status_code=status, message=str(e))
    except (requests.RequestException, OSError) as e:
        logger.error(f"Upload to {url} failed: {e}")
        return UploadResult(success=False, url=url, message=str(e))

    logger.info(f"Upload complete ({response.status_code})")
    return UploadResult(
        success=True,
        url=url,
        status_code=response.status_code,
        message=f"Uploaded {path.name}"
    )
