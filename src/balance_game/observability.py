"""Logging configuration using Loguru.

Provides a colourised human-readable sink for development, a JSON sink for
production, and routes standard-library logging (uvicorn, httpx) through
Loguru so every line shares one format.
"""

import logging
import sys
from typing import Any

from loguru import logger


class InterceptHandler(logging.Handler):
    """Redirect standard library logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record by forwarding it to Loguru."""
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller the record originated from
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _format_dev(record: dict[str, Any]) -> str:
    """Format a record for the terminal, appending bound context."""
    extra = {k: v for k, v in record["extra"].items() if k != "name"}
    context = ""
    if extra:
        context = " | " + " ".join(f"{key}={{extra[{key}]}}" for key in extra)

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        f"{context} - "
        "<level>{message}</level>\n"
    )
    if record["exception"]:
        fmt += "{exception}\n"
    return fmt


def setup_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """Configure Loguru sinks and intercept standard logging.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "json" for serialized output, anything else for text
    """
    logger.remove()
    logger.configure(extra={"name": "balance_game"})

    if log_format == "json":
        logger.add(
            sys.stdout,
            level=log_level.upper(),
            serialize=True,
            backtrace=True,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=_format_dev,
            level=log_level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Reduce noise from third-party libraries
    for logger_name in ["uvicorn.access", "httpx", "httpcore", "asyncio"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> "logger":  # type: ignore[valid-type]
    """Get a logger bound to a module name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        A Loguru logger carrying ``name`` in its extra context
    """
    return logger.bind(name=name)
