"""Logging setup for the Streamlit entry point."""

import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level.upper(), format=_FORMAT)
    else:
        root.setLevel(level.upper())
    # httpx logs every request at INFO, which drowns out the poll loop
    logging.getLogger("httpx").setLevel(logging.WARNING)
