"""Structured logging configuration.

Configures the root logger with a structured format including timestamp,
level, and module name.  Context passed through ``extra=`` (technician id,
user email, ...) is appended to the line as ``key=value`` pairs.  The log
level is controlled by ``settings.LOG_LEVEL``.
"""

import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Attributes every LogRecord carries; anything else arrived through ``extra``
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "color_message"}


class ContextFormatter(logging.Formatter):
    """Text formatter that renders ``extra`` fields after the message."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        }
        if not context:
            return line
        pairs = " ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
        return f"{line} | {pairs}"


def setup_logging() -> None:
    """Configure structured logging for the application.

    Sets the root logger level from ``settings.LOG_LEVEL`` and installs a
    single ``StreamHandler`` writing to *stdout*.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(ContextFormatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    root.addHandler(handler)

    # The Supabase SDK talks over httpx/http2; its request logs are noise
    for name in ("httpx", "httpcore", "hpack", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)
