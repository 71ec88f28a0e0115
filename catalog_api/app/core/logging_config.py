"""
Basic logging configuration for the application.

The ``setup_logging`` function configures the root logger with a
console and optional file handler.  Log format includes the timestamp,
log level, the id of the HTTP request being served, logger name and
message.  Request and correlation ids are kept in context variables
which the request middleware sets for every request; outside a request
they read as ``-``.
"""

import logging
from contextvars import ContextVar
from pathlib import Path
from typing import Optional

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="-")


class RequestIdFilter(logging.Filter):
    """Attach the current request and correlation ids to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.correlation_id = correlation_id_var.get()
        return True


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Console records carry the request id; file records carry both the
    request and the correlation id so that log lines can be joined
    across services.  A root logger that already has handlers is left
    untouched.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, no file
        handler is added.  Paths are resolved relative to the
        current working directory.
    """
    logger = logging.getLogger()
    if logger.handlers:
        # Avoid configuring logging multiple times.  This can happen when
        # running tests or when ``create_app`` is called repeatedly.
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] [%(request_id)s/%(correlation_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    request_filter = RequestIdFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(request_filter)
    logger.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(file_formatter)
        file_handler.addFilter(request_filter)
        logger.addHandler(file_handler)
