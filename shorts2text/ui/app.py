"""
Shorts2Text Streamlit UI: main entry point.

Run with: ``streamlit run shorts2text/ui/app.py``

UX flow: idle -> transcribing -> settled. Clicking "Transcribe" flips the
session into ``job_running`` and reruns so every input renders disabled,
then the job runs to completion on this script run while the presenter
redraws the status, progress bar and clock in place.
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from shorts2text.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (shorts2text/ui/).
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import asyncio  # noqa: E402
import logging  # noqa: E402

import streamlit as st  # noqa: E402

from shorts2text.core.config import get_settings  # noqa: E402
from shorts2text.core.exceptions import EmptyInputError  # noqa: E402
from shorts2text.core.logging_config import configure_logging  # noqa: E402
from shorts2text.core.models import OutputFormat, Projection  # noqa: E402
from shorts2text.services.controller import SUBMIT_LABEL_BUSY, SUBMIT_LABEL_IDLE  # noqa: E402
from shorts2text.ui.presenter import StreamlitPresenter  # noqa: E402
from shorts2text.ui.runner import run_job  # noqa: E402

logger = logging.getLogger(__name__)

_FORMAT_LABELS = {
    OutputFormat.plain: "Plain text",
    OutputFormat.timestamps: "With timestamps",
    OutputFormat.srt: "SubRip (.srt)",
    OutputFormat.vtt: "WebVTT (.vtt)",
}


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    st.set_page_config(page_title="Shorts2Text", page_icon="\U0001f3ac", layout="centered")

    # -- session state defaults --
    defaults = {
        "source_url": "",
        "output_format": settings.default_output_format.value,
        "job_running": False,
        "last_projection": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value

    busy = st.session_state.job_running

    st.title("Shorts2Text")
    st.caption("Paste a short-video link and get the transcript")

    url = st.text_input(
        "Video link",
        key="source_url",
        disabled=busy,
        placeholder="https://…",
    )
    st.selectbox(
        "Output format",
        options=[fmt.value for fmt in OutputFormat],
        format_func=lambda value: _FORMAT_LABELS[OutputFormat(value)],
        key="output_format",
        disabled=busy,
    )
    clicked = st.button(
        SUBMIT_LABEL_BUSY if busy else SUBMIT_LABEL_IDLE,
        type="primary",
        disabled=busy,
    )

    presenter = StreamlitPresenter.create()

    if clicked:
        if not url.strip():
            st.warning(EmptyInputError().detail)
        else:
            st.session_state.job_running = True
            st.rerun()

    if busy:
        try:
            projection = asyncio.run(
                run_job(url, st.session_state.output_format, presenter.render)
            )
            st.session_state.last_projection = projection.model_dump(mode="json")
        finally:
            st.session_state.job_running = False
        st.rerun()

    last = st.session_state.last_projection
    if last is not None:
        presenter.render(Projection.model_validate(last))


main()
