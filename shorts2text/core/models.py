"""
Pydantic v2 models shared by the service client, the job controller and the UI.

Wire payloads mirror the remote transcription API; the controller-side
models (Job, ControllerState, Projection, JobOutcome) never leave the process.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class OutputFormat(StrEnum):
    """Transcript formats the remote service can produce."""

    plain = "plain"
    timestamps = "timestamps"
    srt = "srt"
    vtt = "vtt"


class JobStatus(StrEnum):
    """Status values reported by ``GET /result/{task_id}``.

    The service may send values outside this set; those are kept as plain
    strings on ``JobStatusResponse.status`` and rendered as "working".
    """

    pending = "pending"
    started = "started"
    processing = "processing"
    completed = "completed"
    error = "error"


class Phase(StrEnum):
    """Position of the controller in the job lifecycle."""

    idle = "idle"
    submitting = "submitting"
    polling = "polling"
    settled = "settled"


class Outcome(StrEnum):
    """How a settled job ended."""

    success = "success"
    failure = "failure"
    timeout = "timeout"
    cancelled = "cancelled"


# ---------------------------------------------------------------------------
# Wire payloads
# ---------------------------------------------------------------------------


class TranscribeRequest(BaseModel):
    """POST /transcribe request body."""

    url: str = Field(min_length=1)
    format: OutputFormat = OutputFormat.plain


class TranscribeResponse(BaseModel):
    """POST /transcribe success body."""

    model_config = ConfigDict(extra="ignore")

    task_id: str = Field(min_length=1)


class JobStatusResponse(BaseModel):
    """GET /result/{task_id} success body."""

    model_config = ConfigDict(extra="ignore")

    status: str
    progress: float | None = None
    transcript: str | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (JobStatus.completed, JobStatus.error)


# ---------------------------------------------------------------------------
# Controller state
# ---------------------------------------------------------------------------


class Job(BaseModel):
    """One transcription request, created fresh for every submission."""

    source_url: str
    output_format: OutputFormat
    id: str | None = None
    status: str | None = None
    progress: float = 0.0
    result: str | None = None
    error_message: str | None = None


class ControllerState(BaseModel):
    """Mutable lifecycle state owned by the job controller."""

    phase: Phase = Phase.idle
    outcome: Outcome | None = None
    attempt_count: int = 0
    started_at: float | None = None  # clock reading, not wall time
    selected_format: OutputFormat = OutputFormat.plain
    input_draft: str = ""

    @property
    def busy(self) -> bool:
        return self.phase in (Phase.submitting, Phase.polling)


class Projection(BaseModel):
    """Read-only snapshot of the controller for the presentation layer."""

    model_config = ConfigDict(frozen=True)

    phase: Phase
    outcome: Outcome | None = None
    input_enabled: bool
    format_enabled: bool
    submit_enabled: bool
    submit_label: str
    selected_format: OutputFormat
    status_text: str
    progress_percent: int = 0
    timer_text: str = "00:00"
    separator_visible: bool = True
    result_text: str | None = None
    error_message: str | None = None


class JobOutcome(BaseModel):
    """Terminal result of one controller run."""

    model_config = ConfigDict(frozen=True)

    outcome: Outcome
    job_id: str | None = None
    result: str | None = None
    error_message: str | None = None
    error_code: str | None = None
    attempts: int = 0
    elapsed_s: float = 0.0
    settled_at: datetime

    @model_validator(mode="after")
    def _result_xor_error(self) -> "JobOutcome":
        if (self.result is None) == (self.error_message is None):
            raise ValueError("exactly one of result / error_message must be set")
        if (self.outcome == Outcome.success) != (self.result is not None):
            raise ValueError("result is only set for successful jobs")
        return self
