"""Loguru logging configuration.

Human-readable console output by default, JSON lines when ``json_logs`` is
set, and an optional rotating file sink when a ``log_dir`` is provided.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, *, json_logs: bool = False) -> None:
    """Configure Loguru sinks for the process.

    Args:
        log_level: Minimum log level to emit (case-insensitive).
        log_dir: Optional directory for log files.  When set, a file sink
            rotated every 24 hours and retained for 7 days is added.
        json_logs: Emit serialized JSON records on stderr instead of text.
    """
    level = log_level.upper()
    logger.remove()
    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_LOG_FORMAT)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "civic-atlas.log",
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
