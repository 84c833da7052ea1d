from __future__ import annotations

import logging
import sys
from logging import Formatter, Logger, StreamHandler
from typing import IO, Optional


_HANDLER_MARK = "_qingcloud_csi_disk_handler"


class StdoutFilter(logging.Filter):
    def filter(self, record):
        return record.levelno <= logging.WARNING


class StderrFilter(logging.Filter):
    def filter(self, record):
        return record.levelno >= logging.ERROR


def create_logger(
    name: str, level: str | int | None = None, stream: Optional[IO[str]] = None
) -> Logger:
    """Create a logger with 2 stream handlers.

    Messages with level lower or equal then WARNING go to ``stream`` (stdout by
    default), the others to stderr. Handlers added by a previous call are
    replaced, so calling it twice does not duplicate output.
    """
    logger = logging.getLogger(name)
    try:
        if level is not None:
            logger.setLevel(level.upper() if isinstance(level, str) else level)
        error_msg = None
    except ValueError:
        error_msg = f"Invalid log level: {level}"
    formatter = Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")

    remove_handlers(logger)

    stdout_handler = StreamHandler(stream or sys.stdout)
    stdout_handler.setFormatter(formatter)
    stdout_handler.addFilter(StdoutFilter())
    setattr(stdout_handler, _HANDLER_MARK, True)
    logger.addHandler(stdout_handler)

    stderr_handler = StreamHandler()
    stderr_handler.setFormatter(formatter)
    stderr_handler.addFilter(StderrFilter())
    setattr(stderr_handler, _HANDLER_MARK, True)
    logger.addHandler(stderr_handler)

    if error_msg is not None:
        logger.error(error_msg)

    return logger


def remove_handlers(logger: Logger) -> None:
    for h in list(logger.handlers):
        if getattr(h, _HANDLER_MARK, False):
            logger.removeHandler(h)
