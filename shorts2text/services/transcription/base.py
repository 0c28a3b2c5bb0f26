"""
Abstract base class for remote transcription services.

The job controller only talks to this interface, so tests can script the
service and alternative transports can be dropped in without touching the
lifecycle logic.
"""

from abc import ABC, abstractmethod

from shorts2text.core.models import JobStatusResponse, OutputFormat


class BaseTranscriptionService(ABC):
    """Interface that every transcription service client must implement."""

    @abstractmethod
    async def submit(self, source_url: str, output_format: OutputFormat) -> str:
        """Create a remote transcription job.

        Args:
            source_url: Trimmed, non-empty link to the media to transcribe.
            output_format: Transcript format requested from the service.

        Returns:
            The opaque task id assigned by the service.

        Raises:
            SubmissionFailedError: The service answered with a non-2xx status.
            TransportFailedError: The exchange could not complete.
        """

    @abstractmethod
    async def fetch_status(self, task_id: str) -> JobStatusResponse:
        """Fetch the current status of a job.

        Raises:
            PollFailedError: The service answered with a non-2xx status.
            TransportFailedError: The exchange could not complete.
        """

    async def aclose(self) -> None:
        """Release transport resources. No-op by default."""
