"""
Shorts2Text exception hierarchy.

All application-specific exceptions inherit from Shorts2TextError, so the
job controller can convert any of them into a settled outcome with a
stable ``code``.
"""

from datetime import UTC, datetime


class Shorts2TextError(Exception):
    """Base exception for all Shorts2Text errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "SHORTS2TEXT_ERROR",
    ) -> None:
        self.detail = detail
        self.code = code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


# ---------------------------------------------------------------------------
# Precondition violations (raised to the caller, no state change)
# ---------------------------------------------------------------------------


class EmptyInputError(Shorts2TextError):
    """Raised when a submission is attempted with a blank source URL."""

    def __init__(self) -> None:
        super().__init__(
            detail="Please paste a valid link first!",
            code="EMPTY_INPUT",
        )


class InvalidOutputFormatError(Shorts2TextError):
    """Raised when an output format outside the supported set is selected."""

    def __init__(self, output_format: str) -> None:
        super().__init__(
            detail=f"Unsupported output format: {output_format}",
            code="INVALID_OUTPUT_FORMAT",
        )


class JobAlreadyActiveError(Shorts2TextError):
    """Raised when submitting or changing the format while a job is in flight."""

    def __init__(self) -> None:
        super().__init__(
            detail="A transcription job is already in progress",
            code="JOB_ALREADY_ACTIVE",
        )


# ---------------------------------------------------------------------------
# Job failures (converted into a settled outcome by the controller)
# ---------------------------------------------------------------------------


class SubmissionFailedError(Shorts2TextError):
    """Raised when the service rejects ``POST /transcribe`` with a non-2xx status."""

    def __init__(self, status_code: int, body_text: str = "") -> None:
        self.status_code = status_code
        self.body_text = body_text
        super().__init__(
            detail=f"Server error: {status_code} {body_text}".rstrip(),
            code="SUBMISSION_FAILED",
        )


class TransportFailedError(Shorts2TextError):
    """Raised when a request cannot complete (unreachable, timeout, malformed response)."""

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(detail=f"Transport failure: {cause}", code="TRANSPORT_FAILED")


class PollFailedError(Shorts2TextError):
    """Raised when ``GET /result/{task_id}`` answers with a non-2xx status."""

    def __init__(self, status_code: int, body_text: str = "") -> None:
        self.status_code = status_code
        self.body_text = body_text
        super().__init__(
            detail=f"Failed to fetch result: {status_code} {body_text}".rstrip(),
            code="POLL_FAILED",
        )


class RemoteJobError(Shorts2TextError):
    """Raised when the service reports ``status: "error"`` for the job."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            detail=message or "Transcription failed on the backend.",
            code="REMOTE_JOB_ERROR",
        )


class PollTimeoutError(Shorts2TextError):
    """Raised when the polling budget is exhausted without a terminal status."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            detail=f"Timed out waiting for the result after {attempts} polls",
            code="POLL_TIMEOUT",
        )


class JobCancelledError(Shorts2TextError):
    """Raised inside the controller when a cancellation request is observed."""

    def __init__(self) -> None:
        super().__init__(detail="Transcription cancelled", code="JOB_CANCELLED")
