"""
Asynchronous HTTP client for the remote transcription API.

Uses ``httpx.AsyncClient`` because the job controller runs on an asyncio
event loop and must never block while a request is outstanding.
"""

import logging

import httpx
from pydantic import ValidationError

from shorts2text.core.config import get_settings
from shorts2text.core.exceptions import (
    PollFailedError,
    SubmissionFailedError,
    TransportFailedError,
)
from shorts2text.core.models import (
    JobStatusResponse,
    OutputFormat,
    TranscribeRequest,
    TranscribeResponse,
)
from shorts2text.services.transcription.base import BaseTranscriptionService

logger = logging.getLogger(__name__)


class HttpTranscriptionService(BaseTranscriptionService):
    """Thin async wrapper around httpx for ``/transcribe`` and ``/result``.

    Neither call is retried here: a failed exchange raises immediately and
    the caller decides what happens to the job.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Service root URL (falls back to settings if not provided).
            timeout: Per-request timeout in seconds (falls back to settings).
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
        """
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout if timeout is not None else settings.request_timeout_s,
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute a request, mapping transport-level failures to TransportFailedError.

        Non-2xx responses are returned as-is; callers decide which error they mean.
        """
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException:
            raise TransportFailedError("request timed out") from None
        except httpx.ConnectError as exc:
            raise TransportFailedError(f"cannot reach {self._base_url}: {exc}") from None
        except httpx.HTTPError as exc:
            raise TransportFailedError(f"network error: {exc}") from None

    @staticmethod
    def _parse(resp: httpx.Response, model: type[TranscribeResponse] | type[JobStatusResponse]):
        try:
            return model.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            # json.JSONDecodeError is a ValueError subclass
            raise TransportFailedError(f"malformed response: {exc}") from None

    async def submit(self, source_url: str, output_format: OutputFormat) -> str:
        body = TranscribeRequest(url=source_url, format=output_format)
        resp = await self._request("POST", "/transcribe", json=body.model_dump(mode="json"))
        if not resp.is_success:
            logger.warning("Submission rejected: HTTP %s", resp.status_code)
            raise SubmissionFailedError(resp.status_code, resp.text)
        task_id = self._parse(resp, TranscribeResponse).task_id
        logger.info("Submitted %s (format=%s) as task %s", source_url, output_format, task_id)
        return task_id

    async def fetch_status(self, task_id: str) -> JobStatusResponse:
        resp = await self._request("GET", f"/result/{task_id}")
        if not resp.is_success:
            logger.warning("Status check for task %s failed: HTTP %s", task_id, resp.status_code)
            raise PollFailedError(resp.status_code, resp.reason_phrase or resp.text)
        return self._parse(resp, JobStatusResponse)

    async def aclose(self) -> None:
        await self._client.aclose()
