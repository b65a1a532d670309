"""
Logging configuration using loguru.

Provides a simple setup function that configures loguru with sensible defaults.
Consumers can call setup_logging() at app startup, or just use loguru directly.
"""

import sys

from loguru import logger


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = "<level>[{level.name}]</level> {message}",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure loguru with console and optional file output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file. If None, only logs to stderr.
        fmt: Loguru format string.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=fmt)

    if log_file:
        logger.add(
            log_file,
            level=level.upper(),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}",
            rotation=rotation,
            retention=retention,
        )


def setup_logging_from_config(config, level_override: str | None = None) -> None:
    """Apply the ``logging`` section of a daybook Config.

    ``level_override`` (e.g. from a ``--log-level`` flag) wins over the
    configured level.
    """
    level = level_override or config.get("logging.level", "WARNING") or "WARNING"
    log_file = config.get("logging.file") or None
    setup_logging(level=level, log_file=log_file)
    logger.debug(f"Logging configured at {level.upper()}" + (f" (file: {log_file})" if log_file else ""))
