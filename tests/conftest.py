"""Shared pytest fixtures for the Shorts2Text test suite.

Provides a virtual clock, a scripted transcription service and settings
tuned for fast, deterministic controller runs.
"""

import asyncio
from collections.abc import Iterable

import pytest

from shorts2text.core.config import Settings
from shorts2text.core.models import JobStatusResponse, OutputFormat
from shorts2text.services.transcription.base import BaseTranscriptionService

# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Virtual time: ``sleep`` advances ``now`` instantly and yields once."""

    def __init__(self, start: float = 1000.0) -> None:
        self.current = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds
        await asyncio.sleep(0)


@pytest.fixture
def clock():
    return FakeClock()


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class ScriptedService(BaseTranscriptionService):
    """Transcription service that replays canned submit / status results.

    ``statuses`` items are either status dicts or exceptions to raise. Once
    the script is exhausted the last item repeats.
    """

    def __init__(
        self,
        task_id: str = "abc123",
        statuses: Iterable[dict | Exception] = (),
        submit_error: Exception | None = None,
    ) -> None:
        self.task_id = task_id
        self.statuses = list(statuses)
        self.submit_error = submit_error
        self.submissions: list[tuple[str, OutputFormat]] = []
        self.polls: list[str] = []
        self.on_poll = None

    async def submit(self, source_url: str, output_format: OutputFormat) -> str:
        self.submissions.append((source_url, output_format))
        if self.submit_error is not None:
            raise self.submit_error
        return self.task_id

    async def fetch_status(self, task_id: str) -> JobStatusResponse:
        self.polls.append(task_id)
        if self.on_poll is not None:
            self.on_poll(len(self.polls))
        index = min(len(self.polls), len(self.statuses)) - 1
        item = self.statuses[index]
        if isinstance(item, Exception):
            raise item
        return JobStatusResponse.model_validate(item)


@pytest.fixture
def make_service():
    """Factory for ScriptedService instances."""
    return ScriptedService


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def settings():
    """Settings with the production polling defaults, independent of the environment."""
    return Settings(
        _env_file=None,
        api_base_url="http://test",
        polling_interval_ms=1500,
        max_polling_attempts=240,
        ticker_interval_ms=100,
    )
