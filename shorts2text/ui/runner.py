"""Runs a single job for the Streamlit page and collects its final projection."""

from collections.abc import Callable

from shorts2text.core.config import Settings, get_settings
from shorts2text.core.models import OutputFormat, Projection
from shorts2text.services.controller import JobController
from shorts2text.services.transcription import create_transcription_service


async def run_job(
    source_url: str,
    output_format: OutputFormat | str,
    render: Callable[[Projection], None],
    settings: Settings | None = None,
) -> Projection:
    """Feed the page inputs to a fresh controller and run the job to a settled state.

    Inputs go through ``update_input`` / ``select_format`` exactly as the
    widgets would, so blank input surfaces as ``EmptyInputError`` before
    any request is made.
    """
    settings = settings or get_settings()
    service = create_transcription_service(base_url=settings.api_base_url)
    controller = JobController(service, settings=settings, on_change=render)
    try:
        controller.update_input(source_url)
        controller.select_format(output_format)
        await controller.submit()
    finally:
        await service.aclose()
    return controller.projection
