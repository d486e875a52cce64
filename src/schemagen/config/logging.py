"""Process-wide logging setup for the schemagen command line."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Route log records of every schemagen module to stderr.

    Records carry a timestamp and the emitting module. The run summary is written
    separately and never goes through logging. ``force=True`` replaces handlers
    installed earlier.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
