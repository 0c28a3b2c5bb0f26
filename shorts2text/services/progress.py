"""
Status / progress interpretation.

Pure functions mapping a ``GET /result`` payload to the label and
percentage shown to the user. Progress thresholds: [0,30) analyzing,
[30,70) generating, [70,100) polishing, 100 finalising.
"""

import math

from shorts2text.core.models import JobStatus, JobStatusResponse

WARMING_UP = "Warming up the servers…"
QUEUED = "In line, preparing for transcription…"
STARTED = "Transcription started…"
WORKING = "Working on it…"
FINALISING = "Finalising…"
COMPLETE = "Transcription complete!"
FAILED = "Oops! Something went wrong. Please try again."
TIMED_OUT = "Timed out waiting for the result. Please try again."
CANCELLED = "Transcription cancelled."

GENERATING_FROM = 30
POLISHING_FROM = 70
FINALISING_AT = 100

def clamp_progress(progress: float | None) -> float:
    """Bound a possibly noisy progress value to [0, 100] without rounding."""
    if progress is None:
        return 0.0
    return max(0.0, min(100.0, float(progress)))


def display_percent(progress: float | None) -> int:
    """Whole percentage shown to the user, rounding halves up."""
    return math.floor(clamp_progress(progress) + 0.5)


def phase_label(progress: float) -> str:
    """Return the processing label; the band is chosen from the unrounded value."""
    value = clamp_progress(progress)
    percent = display_percent(value)
    if value < GENERATING_FROM:
        return f"Analyzing audio… ({percent}%)"
    if value < POLISHING_FROM:
        return f"Generating text… ({percent}%)"
    if value < FINALISING_AT:
        return f"Polishing results… ({percent}%)"
    return FINALISING


def describe_status(payload: JobStatusResponse) -> tuple[str, int | None]:
    """Map a non-terminal status payload to ``(status_text, progress_percent)``.

    ``progress_percent`` is None when the status carries no progress, meaning
    the displayed value should stay as it was.
    """
    if payload.status == JobStatus.processing:
        return phase_label(payload.progress or 0.0), display_percent(payload.progress)
    if payload.status == JobStatus.pending:
        return QUEUED, None
    if payload.status == JobStatus.started:
        return STARTED, None
    return WORKING, None
