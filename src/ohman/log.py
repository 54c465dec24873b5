from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def setup_logging(verbosity: int = 0) -> None:
    """Routes `ohman` log records to a Rich handler on stderr."""
    level = _VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbosity > 1,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("ohman")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
