"""Job lifecycle controller: submit, poll, settle.

Owns the state machine

    idle -> submitting -> polling -> settled(success | failure | timeout | cancelled)

and emits an immutable ``Projection`` to the presentation layer on every
transition and every ticker tick. Only one job may be in flight per
controller; a second ``submit()`` while busy raises ``JobAlreadyActiveError``.

Usage::

    controller = JobController(service, settings=settings, on_change=render)
    controller.update_input("https://example.com/clip")
    outcome = await controller.submit()
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from tenacity import AsyncRetrying, RetryError, retry_if_result, stop_after_attempt, wait_fixed

from shorts2text.core.config import Settings, get_settings
from shorts2text.core.exceptions import (
    EmptyInputError,
    JobAlreadyActiveError,
    JobCancelledError,
    PollTimeoutError,
    RemoteJobError,
    Shorts2TextError,
)
from shorts2text.core.models import (
    ControllerState,
    Job,
    JobOutcome,
    JobStatus,
    JobStatusResponse,
    Outcome,
    OutputFormat,
    Phase,
    Projection,
)
from shorts2text.services import progress
from shorts2text.services.clock import Clock, MonotonicClock
from shorts2text.services.submitter import JobSubmitter, coerce_format
from shorts2text.services.ticker import ElapsedTicker, format_elapsed
from shorts2text.services.transcription.base import BaseTranscriptionService

logger = logging.getLogger(__name__)

SUBMIT_LABEL_IDLE = "Transcribe"
SUBMIT_LABEL_BUSY = "Transcribing"

_SETTLED_TEXT = {
    Outcome.success: progress.COMPLETE,
    Outcome.failure: progress.FAILED,
    Outcome.timeout: progress.TIMED_OUT,
    Outcome.cancelled: progress.CANCELLED,
}


class JobController:
    """Runs one transcription job at a time and projects its state for the UI.

    Args:
        service: Remote transcription service client.
        settings: Polling and presentation settings (defaults to ``get_settings()``).
        clock: Time source for poll delays and the elapsed-time ticker.
        on_change: Called synchronously with each new projection.
        enable_ticker: Run the elapsed-time ticker while a job is in flight.
    """

    def __init__(
        self,
        service: BaseTranscriptionService,
        settings: Settings | None = None,
        clock: Clock | None = None,
        on_change: Callable[[Projection], None] | None = None,
        enable_ticker: bool = True,
    ) -> None:
        self._settings = settings or get_settings()
        self._submitter = JobSubmitter(service)
        self._service = service
        self._clock = clock or MonotonicClock()
        self._on_change = on_change
        self._state = ControllerState(selected_format=self._settings.default_output_format)
        self._job: Job | None = None
        self._outcome: JobOutcome | None = None
        self._cancel_event = asyncio.Event()

        self._status_text = ""
        self._progress_percent = 0
        self._timer_text = format_elapsed(0)
        self._separator_visible = True
        self._last_projection: Projection | None = None

        self._ticker = (
            ElapsedTicker(self._clock, self._on_tick, interval=self._settings.ticker_interval_s)
            if enable_ticker
            else None
        )

    # -- read-only views --

    @property
    def state(self) -> ControllerState:
        return self._state.model_copy()

    @property
    def job(self) -> Job | None:
        return self._job.model_copy() if self._job is not None else None

    @property
    def last_outcome(self) -> JobOutcome | None:
        return self._outcome

    @property
    def projection(self) -> Projection:
        busy = self._state.busy
        settled = self._state.phase == Phase.settled
        job = self._job
        return Projection(
            phase=self._state.phase,
            outcome=self._state.outcome,
            input_enabled=not busy,
            format_enabled=not busy,
            submit_enabled=not busy and bool(self._state.input_draft.strip()),
            submit_label=SUBMIT_LABEL_BUSY if busy else SUBMIT_LABEL_IDLE,
            selected_format=self._state.selected_format,
            status_text=self._status_text,
            progress_percent=self._progress_percent,
            timer_text=self._timer_text,
            separator_visible=self._separator_visible,
            result_text=job.result if settled and job is not None else None,
            error_message=job.error_message if settled and job is not None else None,
        )

    # -- user inputs --

    def update_input(self, text: str) -> None:
        """Record the current URL field contents (re-evaluates ``submit_enabled``)."""
        self._state.input_draft = text
        self._emit()

    def select_format(self, output_format: OutputFormat | str) -> None:
        """Change the output format for the next submission."""
        if self._state.busy:
            raise JobAlreadyActiveError()
        self._state.selected_format = coerce_format(output_format)
        self._emit()

    def cancel(self) -> bool:
        """Request cancellation of the in-flight job.

        Takes effect before the next network request; an outstanding
        request is allowed to finish. Returns False when nothing is running.
        """
        if not self._state.busy:
            return False
        logger.info("Cancellation requested for job %s", self._job.id if self._job else None)
        self._cancel_event.set()
        return True

    async def submit(
        self,
        source_url: str | None = None,
        output_format: OutputFormat | str | None = None,
    ) -> JobOutcome:
        """Run one job from submission to a settled outcome.

        Args:
            source_url: Link to transcribe; defaults to the last ``update_input()`` text.
            output_format: Overrides the selected format for this and later jobs.

        Returns:
            The settled outcome. Job failures never raise.

        Raises:
            JobAlreadyActiveError: A job is already submitting or polling.
            EmptyInputError: The URL is blank after trimming.
            InvalidOutputFormatError: ``output_format`` is not supported.
        """
        if self._state.busy:
            raise JobAlreadyActiveError()
        raw = self._state.input_draft if source_url is None else source_url
        url = raw.strip()
        if not url:
            raise EmptyInputError()
        fmt = self._state.selected_format if output_format is None else coerce_format(output_format)

        self._state.input_draft = raw
        self._state.selected_format = fmt
        job = Job(source_url=url, output_format=fmt)
        self._begin(job)

        try:
            return await self._drive(job)
        except Exception:
            logger.exception("Unexpected error while running job for %s", url)
            return self._settle(
                Outcome.failure,
                error_message="Internal error",
                error_code="INTERNAL_ERROR",
            )
        finally:
            if self._state.busy:
                # Only reachable when the surrounding task is cancelled mid-flight
                self._settle(
                    Outcome.cancelled,
                    error_message="Transcription cancelled",
                    error_code="JOB_CANCELLED",
                )
            if self._ticker is not None:
                await self._ticker.aclose()

    # -- lifecycle --

    def _begin(self, job: Job) -> None:
        self._job = job
        self._outcome = None
        self._cancel_event = asyncio.Event()
        self._state.phase = Phase.submitting
        self._state.outcome = None
        self._state.attempt_count = 0
        self._state.started_at = self._clock.now()

        self._status_text = progress.WARMING_UP
        self._progress_percent = 0
        self._timer_text = format_elapsed(0)
        self._separator_visible = True
        logger.info("Starting job for %s (format=%s)", job.source_url, job.output_format)
        self._emit()

        if self._ticker is not None:
            self._ticker.start(started_at=self._state.started_at)

    async def _drive(self, job: Job) -> JobOutcome:
        try:
            self._check_cancelled()
            job.id = await self._submitter.submit(job.source_url, job.output_format)
            self._state.phase = Phase.polling
            self._emit()
            transcript = await self._poll_until_terminal(job)
        except JobCancelledError as exc:
            return self._settle(Outcome.cancelled, error_message=exc.detail, error_code=exc.code)
        except PollTimeoutError as exc:
            logger.warning("Job %s timed out after %s polls", job.id, exc.attempts)
            return self._settle(Outcome.timeout, error_message=exc.detail, error_code=exc.code)
        except Shorts2TextError as exc:
            logger.warning("Job %s failed [%s]: %s", job.id, exc.code, exc.detail)
            return self._settle(Outcome.failure, error_message=exc.detail, error_code=exc.code)
        return self._settle(Outcome.success, result=transcript)

    async def _poll_until_terminal(self, job: Job) -> str:
        """Poll at a fixed interval until completed/error or the attempt budget runs out."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._settings.max_polling_attempts),
            wait=wait_fixed(self._settings.polling_interval_s),
            retry=retry_if_result(lambda payload: not payload.is_terminal),
            sleep=self._clock.sleep,
        )
        try:
            payload = await retrying(self._poll_once, job)
        except RetryError:
            raise PollTimeoutError(self._state.attempt_count) from None

        if payload.status == JobStatus.error:
            raise RemoteJobError(payload.error)
        return payload.transcript or ""

    async def _poll_once(self, job: Job) -> JobStatusResponse:
        self._check_cancelled()
        self._state.attempt_count += 1
        payload = await self._service.fetch_status(job.id)
        job.status = payload.status
        logger.debug(
            "Poll %s for job %s: status=%s progress=%s",
            self._state.attempt_count,
            job.id,
            payload.status,
            payload.progress,
        )
        if not payload.is_terminal:
            self._status_text, percent = progress.describe_status(payload)
            if percent is not None:
                job.progress = payload.progress or 0.0
                self._progress_percent = percent
            self._emit()
        return payload

    def _check_cancelled(self) -> None:
        if self._cancel_event.is_set():
            raise JobCancelledError()

    def _settle(
        self,
        outcome: Outcome,
        result: str | None = None,
        error_message: str | None = None,
        error_code: str | None = None,
    ) -> JobOutcome:
        job = self._job
        if self._ticker is not None:
            self._timer_text = self._ticker.stop()
        self._separator_visible = True
        elapsed = self._clock.now() - (self._state.started_at or 0.0)

        job.result = result
        job.error_message = error_message
        self._state.phase = Phase.settled
        self._state.outcome = outcome
        self._status_text = _SETTLED_TEXT[outcome]
        if outcome == Outcome.success:
            self._progress_percent = 100

        self._outcome = JobOutcome(
            outcome=outcome,
            job_id=job.id,
            result=result,
            error_message=error_message,
            error_code=error_code,
            attempts=self._state.attempt_count,
            elapsed_s=elapsed,
            settled_at=datetime.now(UTC),
        )
        logger.info(
            "Job %s settled: %s after %s polls (%.1fs)",
            job.id,
            outcome,
            self._state.attempt_count,
            elapsed,
        )
        self._emit()
        return self._outcome

    # -- projection emission --

    def _on_tick(self, timer_text: str, separator_visible: bool) -> None:
        if not self._state.busy:
            return
        self._timer_text = timer_text
        self._separator_visible = separator_visible
        self._emit()

    def _emit(self) -> None:
        """Send the current projection to ``on_change`` if it differs from the last one.

        Identical snapshots are not re-sent: repeated polls with the same
        status, and ticker ticks that do not change the ``MM:SS`` text or the
        separator blink, produce no emission.
        """
        projection = self.projection
        if projection == self._last_projection:
            return
        self._last_projection = projection
        if self._on_change is None:
            return
        try:
            self._on_change(projection)
        except Exception:
            logger.warning("Projection callback failed (non-fatal)", exc_info=True)
