"""
Presentation adapter: applies controller projections to Streamlit placeholders.

Holds no state of its own; every ``render()`` fully redraws the status,
progress bar, clock and transcript from the projection it is given.
"""

from typing import Any

import streamlit as st

from shorts2text.core.models import Outcome, Projection


def timer_html(timer_text: str, separator_visible: bool) -> str:
    """Render ``MM:SS`` with the blinking separator as inline HTML."""
    minutes, _, seconds = timer_text.rpartition(":")
    opacity = 1 if separator_visible else 0
    return (
        f'<span class="s2t-timer">{minutes}'
        f'<span class="s2t-colon" style="opacity:{opacity};">:</span>{seconds}</span>'
    )


class StreamlitPresenter:
    """Draws a ``Projection`` into four ``st.empty()`` slots.

    Args:
        status: Slot for the status line.
        progress: Slot for the progress bar.
        timer: Slot for the elapsed-time clock.
        result: Slot for the transcript (``st.code`` gives a copy button).
    """

    def __init__(self, status: Any, progress: Any, timer: Any, result: Any) -> None:
        self._status = status
        self._progress = progress
        self._timer = timer
        self._result = result

    @classmethod
    def create(cls) -> "StreamlitPresenter":
        """Allocate placeholders at the current position of the page."""
        timer = st.empty()
        status = st.empty()
        progress = st.empty()
        result = st.empty()
        return cls(status=status, progress=progress, timer=timer, result=result)

    def render(self, projection: Projection) -> None:
        self._timer.markdown(
            timer_html(projection.timer_text, projection.separator_visible),
            unsafe_allow_html=True,
        )
        self._progress.progress(projection.progress_percent)
        self._render_status(projection)

        if projection.result_text is not None:
            self._result.code(projection.result_text, language=None)
        else:
            self._result.empty()

    def _render_status(self, projection: Projection) -> None:
        text = projection.status_text
        if not text:
            self._status.empty()
        elif projection.outcome == Outcome.success:
            self._status.success(text)
        elif projection.outcome == Outcome.failure:
            self._status.error(text)
        elif projection.outcome in (Outcome.timeout, Outcome.cancelled):
            self._status.warning(text)
        else:
            self._status.info(text)
