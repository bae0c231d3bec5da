"""Shared logging helpers for the enricher."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with terse CLI defaults.

    Pass ``force=True`` to reconfigure during tests or when the CLI switches to
    verbose output after parsing its arguments.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    # httpx logs every request at INFO; only surface it when debugging
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
