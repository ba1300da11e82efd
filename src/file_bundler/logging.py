from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path

LOG_LEVEL_ENV = "FILE_BUNDLER_LOG_LEVEL"

_LOGGING_CONFIGURED = False


def resolve_log_level(level: str | None = None) -> int:
    """Turn a level name into a `logging` level.

    Args:
        level: Level name such as "warning". If None, `FILE_BUNDLER_LOG_LEVEL` is read.

    Returns:
        The numeric level; unknown or missing names give `logging.INFO`.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").strip().upper()
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def setup_logging(filename: str | Path | None = None, level: str | None = None) -> structlog.BoundLogger:
    """Set up structured logging for the file_bundler module.

    Args:
        filename: Optional path to a log file. If None, logs are written to stderr.
        level: Optional level name, overriding `FILE_BUNDLER_LOG_LEVEL`.

    Returns:
        A structlog logger instance configured for the file_bundler module.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    log_level = resolve_log_level(level)
    handler: logging.Handler
    if filename:
        handler = logging.FileHandler(str(filename), encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    if not _LOGGING_CONFIGURED:
        logging.basicConfig(handlers=[handler], format="%(message)s")
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            # level filtering is left to the stdlib logger below
            wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_CONFIGURED = True
    elif filename:
        handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(handler)

    logging.getLogger("file_bundler").setLevel(log_level)
    return structlog.get_logger("file_bundler")


logger = setup_logging()
