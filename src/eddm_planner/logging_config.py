"""Logging setup for the API process."""

import logging


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Per-request httpx lines drown out fetch summaries.
    logging.getLogger("httpx").setLevel(logging.WARNING)
