"""Unit tests for JobSubmitter."""

from unittest.mock import AsyncMock

import pytest

from shorts2text.core.exceptions import InvalidOutputFormatError, SubmissionFailedError
from shorts2text.core.models import OutputFormat
from shorts2text.services.submitter import JobSubmitter, coerce_format
from shorts2text.services.transcription.base import BaseTranscriptionService


@pytest.fixture
def service():
    service = AsyncMock(spec=BaseTranscriptionService)
    service.submit.return_value = "abc123"
    return service


async def test_submit_returns_task_id(service):
    submitter = JobSubmitter(service)

    task_id = await submitter.submit("https://example.com/clip", "plain")

    assert task_id == "abc123"
    service.submit.assert_awaited_once_with("https://example.com/clip", OutputFormat.plain)


async def test_invalid_format_rejected_before_network(service):
    submitter = JobSubmitter(service)

    with pytest.raises(InvalidOutputFormatError, match="docx"):
        await submitter.submit("https://example.com/clip", "docx")

    service.submit.assert_not_awaited()


async def test_failures_propagate_without_retry(service):
    service.submit.side_effect = SubmissionFailedError(500, "boom")
    submitter = JobSubmitter(service)

    with pytest.raises(SubmissionFailedError):
        await submitter.submit("https://example.com/clip", OutputFormat.vtt)

    assert service.submit.await_count == 1


def test_coerce_format_accepts_enum_and_string():
    assert coerce_format(OutputFormat.srt) is OutputFormat.srt
    assert coerce_format("timestamps") is OutputFormat.timestamps
