"""Job submission: turns a source URL and output format into a remote task id."""

import logging

from shorts2text.core.exceptions import InvalidOutputFormatError
from shorts2text.core.models import OutputFormat
from shorts2text.services.transcription.base import BaseTranscriptionService

logger = logging.getLogger(__name__)


def coerce_format(value: OutputFormat | str) -> OutputFormat:
    """Return ``value`` as an OutputFormat or raise InvalidOutputFormatError."""
    try:
        return OutputFormat(value)
    except ValueError:
        raise InvalidOutputFormatError(str(value)) from None


class JobSubmitter:
    """Single request/response exchange that creates a remote job.

    Failures (``SubmissionFailedError`` / ``TransportFailedError``) propagate
    unchanged; there is no retry at this layer.

    Args:
        service: The remote transcription service client.
    """

    def __init__(self, service: BaseTranscriptionService) -> None:
        self._service = service

    async def submit(self, source_url: str, output_format: OutputFormat | str) -> str:
        """Submit ``source_url`` and return the job id.

        The caller is expected to have rejected blank input already.
        """
        fmt = coerce_format(output_format)
        logger.debug("Submitting %s as %s", source_url, fmt)
        return await self._service.submit(source_url, fmt)
