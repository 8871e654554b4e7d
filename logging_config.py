from __future__ import annotations

import logging
from logging.config import dictConfig

from settings import get_settings

_configured = False


def resolve_level(level: str | int) -> int:
    """Map a level name such as ``"debug"`` to its numeric value.

    Raises ``ValueError`` for names the logging module does not know.
    """
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"unknown log level {level!r}")
    return numeric


class ContextualFormatter(logging.Formatter):
    """Append the host-check context passed through ``extra=`` to each line."""

    context_keys = (
        "metric",
        "label",
        "value",
        "command",
        "returncode",
        "config_path",
        "alert_count",
        "smtp_host",
        "reason",
    )

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in self.context_keys
            if getattr(record, key, None) is not None
        )
        return f"{message} [{context}]" if context else message


def configure_logging(level: str | int | None = None) -> None:
    """Send process-wide logging to stderr so stdout only carries the report."""
    global _configured
    if _configured:
        return

    log_level = resolve_level(level if level is not None else get_settings().log_level)

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "hostwatch": {
                    "()": "logging_config.ContextualFormatter",
                    "fmt": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                }
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "hostwatch",
                }
            },
            "root": {"handlers": ["stderr"], "level": log_level},
        }
    )

    _configured = True
