"""Logging configuration for pipeline processes."""

from __future__ import annotations

import logging

# Emits the rendered record for every ingested utterance at DEBUG.
INGEST_LOGGER = "src.datatypes.ingest"


def configure_logging(level: str = "INFO", *, log_structured_inputs: bool = False) -> None:
    """Configure Python logging for the process.

    With `log_structured_inputs`, rendered structured inputs are logged even when `level` is above
    `DEBUG`; they may contain user text, so this is off by default.
    """

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    logging.getLogger("psycopg").setLevel(logging.WARNING)
    if log_structured_inputs:
        logging.getLogger(INGEST_LOGGER).setLevel(logging.DEBUG)
