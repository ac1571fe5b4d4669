"""HTTP POST submission to the grading API."""

import json
import socket
import ssl
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from ..config.defaults import SubmissionApiParams
from ..errors import SubmissionError
from ..models.submission import SubmissionRecord
from .base import BaseSubmitter


class HttpSubmitter(BaseSubmitter):
    """POSTs submission records as JSON to `{base_url}/{endpoint}`."""

    def __init__(self, config: SubmissionApiParams, name: str = "http"):
        super().__init__(name)
        self.config = config

        parsed = urlparse(config.base_url)
        if not parsed.scheme or not parsed.netloc:
            raise SubmissionError(f"Invalid grading API URL: {config.base_url}")

    @property
    def url(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/{self.config.endpoint.lstrip('/')}"

    def _build_request(self, record: SubmissionRecord) -> Request:
        data = json.dumps(record.to_payload()).encode('utf-8')
        headers = {
            'Content-Type': 'application/json',
            'Content-Length': str(len(data)),
            'Accept': 'application/json',
            'User-Agent': 'attempt-tracker/0.1',
        }
        if self.config.auth_token:
            headers['Authorization'] = f"Bearer {self.config.auth_token}"

        return Request(self.url, data=data, headers=headers, method='POST')

    def submit(self, record: SubmissionRecord) -> Optional[dict[str, Any]]:
        """Deliver a record, returning the `data` object of the response."""
        request = self._build_request(record)
        context = None
        if not self.config.verify_ssl and request.full_url.startswith("https"):
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        try:
            with urlopen(request, timeout=self.config.timeout_seconds, context=context) as response:
                raw_body = response.read()
        except HTTPError as e:
            self._error_count += 1
            self.logger.error(
                "Grading API rejected submission",
                challenge_id=record.challenge_id,
                status_code=e.code,
                reason=str(e.reason)
            )
            raise SubmissionError(
                f"HTTP {e.code}: {e.reason}",
                challenge_id=record.challenge_id,
                status_code=e.code,
                retryable=e.code >= 500 or e.code == 429
            ) from e
        except (URLError, socket.timeout, TimeoutError) as e:
            self._error_count += 1
            self.logger.error(
                "Grading API unreachable",
                challenge_id=record.challenge_id,
                error=str(e)
            )
            raise SubmissionError(
                f"Network error: {e}",
                challenge_id=record.challenge_id,
                retryable=True
            ) from e

        self._submit_count += 1
        self.logger.info(
            "Submission delivered",
            challenge_id=record.challenge_id,
            time_spent_ms=record.time_spent_ms
        )

        if not raw_body:
            return None
        try:
            payload = json.loads(raw_body.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError):
            self.logger.warning("Grading API returned non-JSON body", challenge_id=record.challenge_id)
            return None

        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            return payload["data"]
        return payload if isinstance(payload, dict) else None
