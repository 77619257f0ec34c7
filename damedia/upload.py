"""Upload of local file records to the DAM.

``DamUploader.store`` posts a record's bytes to the DAM upload endpoint and,
on success, points the record at ``<scheme>://<returned path>``. Failures are
logged and leave the record where it was; the upload is attempted once and
never retried or rolled back.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Dict, Optional

from .config import DamConfig
from .errors import FetchFailure
from .records import FileRecord
from .transport import HttpClient, HttpResponse, RequestsHttpClient

log = logging.getLogger(__name__)

__all__ = ["DamUploader", "build_payload"]


def build_payload(record: FileRecord) -> Dict[str, Any]:
    """Return the JSON body the DAM expects for ``record``.

    A record named ``a.txt`` holding ``b"hi"`` gives
    ``{"entity": {"filename": "a.txt"}, "content": "aGk="}``.
    """
    return {
        "entity": {"filename": record.filename()},
        "content": base64.b64encode(record.read_bytes()).decode("ascii"),
    }


def _remote_path(response: HttpResponse) -> str:
    # The DAM answers with a JSON string such as "/images/a.txt".
    try:
        result = response.json()
    except ValueError:
        result = response.text
    if not isinstance(result, str):
        result = "" if result is None else str(result)
    return result


class DamUploader:
    """Mirror local file records to the DAM."""

    def __init__(
        self,
        config: Optional[DamConfig] = None,
        http_client: Optional[HttpClient] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config or DamConfig()
        self.http = http_client or RequestsHttpClient(timeout=self.config.timeout)
        self.log = logger or log

    def build_payload(self, record: FileRecord) -> Dict[str, Any]:
        return build_payload(record)

    def upload(self, record: FileRecord) -> Optional[str]:
        """POST ``record`` to the upload endpoint.

        Returns:
            The path the DAM stored the file under, or None if the record could
            not be read, the request failed, or the DAM answered with anything
            but HTTP 200.
        """
        try:
            payload = self.build_payload(record)
        except OSError as exc:
            self.log.error("Cannot read %s for upload: %s", record.filename(), exc)
            return None
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Content-Length": str(len(body)),
        }
        try:
            response = self.http.post(self.config.upload_url, body, headers)
        except FetchFailure as exc:
            self.log.error("Upload of %s to DAM failed: %s", record.filename(), exc)
            return None

        if response.status_code != 200:
            self.log.error(
                'Unexpected HTTP code %s, message "%s"',
                response.status_code,
                response.text,
            )
            return None

        result = _remote_path(response)
        self.log.info("%s was uploaded to DAM. Result: %s", record.filename(), result)
        return result

    def store(self, record: FileRecord) -> bool:
        """Upload ``record`` and relocate it to its DAM URI.

        Returns:
            True if the record now points at the DAM copy, False otherwise.
        """
        result = self.upload(record)
        if result is None:
            return False
        path = result.strip("/")
        if not path:
            self.log.error("DAM returned no path for %s", record.filename())
            return False
        record.set_location(f"{self.config.prefix}{path}")
        return True
