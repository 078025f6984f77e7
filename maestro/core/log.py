"""Logging configuration using loguru.

Intercepts stdlib logging so that sqlalchemy and aiosqlite records flow
through the same sink as the CLI's own messages.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger


class _InterceptHandler(logging.Handler):
    """Bridge stdlib logging records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging-module frames so the real call-site is reported
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "WARNING") -> None:
    """Configure loguru as the sole logging sink for a ``dvm`` invocation.

    Output goes to stderr so that YAML written to stdout stays pipeable.
    """
    level = level.upper()

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    # The engine logs every statement at INFO when echo is on
    for name in ("sqlalchemy.engine", "aiosqlite"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging initialised (level={})", level)
