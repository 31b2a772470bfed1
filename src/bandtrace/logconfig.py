"""Logging setup for the command line entry point.

Library modules only create module-level loggers under the ``bandtrace``
namespace. Handlers are attached here, once, by the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    name: str = "bandtrace",
    level: int = logging.WARNING,
    log_format: str = DEFAULT_FORMAT,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """Configure the package logger.

    Existing handlers are replaced, so calling this again (for example from
    repeated CLI runs in one process) does not duplicate output.

    Args:
        name: Logger name to configure.
        level: Minimum level to emit.
        log_format: Format string shared by all handlers.
        log_file: Optional file to log to in addition to stderr.

    Returns:
        The configured logger. It does not propagate to the root logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger
