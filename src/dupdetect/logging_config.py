# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Logging setup for applications embedding the detector."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(
    level: int = logging.INFO, console: Console | None = None
) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
        console: Optional Rich console to write to; defaults to stderr.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(console=console, rich_tracebacks=True, show_path=False)
        ],
        force=True,
    )
