"""Logging setup.

The TUI owns the terminal, so log records go to a rotating file instead of
stderr.
"""

import os
from pathlib import Path

from loguru import logger

DEFAULT_LOG_PATH = Path.home() / ".config" / "folha" / "folha.log"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(path: Path = DEFAULT_LOG_PATH, level: str | None = None) -> None:
    """Replace the default stderr sink with a rotating file sink."""
    if level is None:
        level = os.environ.get("FOLHA_LOG_LEVEL", "INFO").upper()

    path.parent.mkdir(parents=True, exist_ok=True)
    logger.remove()
    logger.add(
        path,
        level=level,
        format=LOG_FORMAT,
        rotation="5 MB",
        retention="14 days",
        encoding="utf-8",
    )
