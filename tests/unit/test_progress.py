"""Unit tests for status / progress label projection."""

import pytest

from shorts2text.core.models import JobStatusResponse
from shorts2text.services import progress
from shorts2text.services.progress import (
    clamp_progress,
    describe_status,
    display_percent,
    phase_label,
)


def _expected_stage(percent: int) -> str:
    if percent < 30:
        return "Analyzing audio"
    if percent < 70:
        return "Generating text"
    if percent < 100:
        return "Polishing results"
    return "Finalising"


@pytest.mark.parametrize("percent", range(0, 101))
def test_phase_label_covers_whole_range(percent):
    """Every integer percentage maps to exactly the stage its threshold band names."""
    label = phase_label(percent)
    assert label.startswith(_expected_stage(percent))


@pytest.mark.parametrize(
    ("percent", "expected"),
    [
        (0, "Analyzing audio… (0%)"),
        (29, "Analyzing audio… (29%)"),
        (30, "Generating text… (30%)"),
        (69, "Generating text… (69%)"),
        (70, "Polishing results… (70%)"),
        (99, "Polishing results… (99%)"),
        (100, "Finalising…"),
    ],
)
def test_phase_label_boundaries(percent, expected):
    assert phase_label(percent) == expected


@pytest.mark.parametrize(
    ("raw", "stage"),
    [
        (29.4, "Analyzing audio"),
        (29.6, "Analyzing audio"),
        (29.99, "Analyzing audio"),
        (69.5, "Generating text"),
        (69.9, "Generating text"),
        (99.6, "Polishing results"),
        (99.9, "Polishing results"),
        (100.0, "Finalising"),
    ],
)
def test_fractional_progress_stays_in_its_band(raw, stage):
    """The band follows the unrounded value even when the shown percent rounds across it."""
    text, _ = describe_status(JobStatusResponse(status="processing", progress=raw))
    assert text.startswith(stage)
    assert text.startswith(_expected_stage(int(raw)))


def test_fractional_progress_rounds_only_the_display():
    text, percent = describe_status(JobStatusResponse(status="processing", progress=29.6))
    assert text == "Analyzing audio… (30%)"
    assert percent == 30


class TestClampProgress:
    def test_missing_progress_is_zero(self):
        assert clamp_progress(None) == 0

    def test_keeps_fractions(self):
        assert clamp_progress(44.6) == 44.6

    def test_clamps_out_of_range(self):
        assert clamp_progress(-5) == 0
        assert clamp_progress(180) == 100


class TestDisplayPercent:
    def test_rounds_half_up(self):
        assert display_percent(44.5) == 45
        assert display_percent(44.4) == 44

    def test_missing_and_out_of_range(self):
        assert display_percent(None) == 0
        assert display_percent(180.2) == 100


class TestDescribeStatus:
    def test_processing_with_progress(self):
        text, percent = describe_status(JobStatusResponse(status="processing", progress=45))
        assert text == "Generating text… (45%)"
        assert percent == 45

    def test_processing_without_progress_defaults_to_zero(self):
        text, percent = describe_status(JobStatusResponse(status="processing"))
        assert text == "Analyzing audio… (0%)"
        assert percent == 0

    def test_pending_and_started_have_distinct_labels(self):
        pending, pending_pct = describe_status(JobStatusResponse(status="pending"))
        started, started_pct = describe_status(JobStatusResponse(status="started"))
        assert pending == progress.QUEUED
        assert started == progress.STARTED
        assert pending != started
        assert pending_pct is None and started_pct is None

    def test_unknown_status_is_generic_working(self):
        text, percent = describe_status(JobStatusResponse(status="retrying-on-gpu"))
        assert text == progress.WORKING
        assert percent is None
