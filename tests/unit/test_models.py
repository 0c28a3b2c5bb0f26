"""Unit tests for the shared pydantic models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from shorts2text.core.models import (
    ControllerState,
    JobOutcome,
    JobStatusResponse,
    Outcome,
    Phase,
    Projection,
    TranscribeRequest,
)


class TestJobStatusResponse:
    @pytest.mark.parametrize("status", ["completed", "error"])
    def test_terminal_statuses(self, status):
        assert JobStatusResponse(status=status).is_terminal

    @pytest.mark.parametrize("status", ["pending", "started", "processing", "mystery"])
    def test_non_terminal_statuses(self, status):
        assert not JobStatusResponse(status=status).is_terminal

    def test_extra_fields_ignored(self):
        payload = JobStatusResponse.model_validate({"status": "pending", "queue_position": 3})
        assert payload.status == "pending"


class TestJobOutcome:
    def test_success_requires_result_only(self):
        outcome = JobOutcome(outcome=Outcome.success, result="hi", settled_at=datetime.now(UTC))
        assert outcome.error_message is None

    def test_both_set_rejected(self):
        with pytest.raises(ValidationError):
            JobOutcome(
                outcome=Outcome.success,
                result="hi",
                error_message="boom",
                settled_at=datetime.now(UTC),
            )

    def test_neither_set_rejected(self):
        with pytest.raises(ValidationError):
            JobOutcome(outcome=Outcome.failure, settled_at=datetime.now(UTC))

    def test_failure_with_result_rejected(self):
        with pytest.raises(ValidationError):
            JobOutcome(outcome=Outcome.timeout, result="partial", settled_at=datetime.now(UTC))


def test_controller_state_busy_phases():
    assert not ControllerState(phase=Phase.idle).busy
    assert ControllerState(phase=Phase.submitting).busy
    assert ControllerState(phase=Phase.polling).busy
    assert not ControllerState(phase=Phase.settled).busy


def test_projection_is_frozen():
    projection = Projection(
        phase=Phase.idle,
        input_enabled=True,
        format_enabled=True,
        submit_enabled=False,
        submit_label="Transcribe",
        selected_format="plain",
        status_text="",
    )
    with pytest.raises(ValidationError):
        projection.status_text = "changed"


def test_transcribe_request_rejects_blank_url():
    with pytest.raises(ValidationError):
        TranscribeRequest(url="")
