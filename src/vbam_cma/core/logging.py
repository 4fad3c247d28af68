"""
VBAM Structured Logging

All vbam_cma loggers share one stderr handler. The level comes from
VBAM_LOG_LEVEL (or VBAM_DEBUG) unless the CLI overrides it with
--verbose; VBAM_LOG_JSON switches the handler to one JSON object per line.

Usage:
    from vbam_cma.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Opened campaign %r", name)
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Optional

from .config import get_settings

# Attributes every LogRecord carries; anything else was passed via extra=
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "taskName"}


class VbamFormatter(logging.Formatter):
    """
    Formats records as `[VBAM LEVEL] [module] message` or as JSON.

    JSON output includes any extra= fields, e.g. the campaign name.
    """

    def __init__(self, json_output: bool = False) -> None:
        super().__init__()
        self.json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        exc_text = None
        if record.exc_info:
            exc_text = "".join(traceback.format_exception(*record.exc_info))

        if not self.json_output:
            module = record.name.rsplit(".", 1)[-1]
            text = f"[VBAM {record.levelname}] [{module}] {record.getMessage()}"
            return f"{text}\n{exc_text}" if exc_text else text

        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS
        )
        if exc_text:
            payload["exception"] = exc_text
        return json.dumps(payload, default=str)


_loggers: dict[str, logging.Logger] = {}
_handler: Optional[logging.Handler] = None
_level_override: Optional[int] = None


def _current_level() -> int:
    if _level_override is not None:
        return _level_override
    return get_settings().log_level_int


def _shared_handler() -> logging.Handler:
    global _handler
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(VbamFormatter(json_output=get_settings().log_json))
    return _handler


def get_logger(name: str) -> logging.Logger:
    """
    Get the logger for a module, attaching the shared handler on first use.

    Args:
        name: Module name (typically __name__)
    """
    logger = _loggers.get(name)
    if logger is None:
        logger = logging.getLogger(name)
        logger.setLevel(_current_level())
        logger.addHandler(_shared_handler())
        logger.propagate = False
        _loggers[name] = logger
    return logger


def set_log_level(level: int) -> None:
    """Override the configured level for existing and future VBAM loggers."""
    global _level_override
    _level_override = level
    for logger in _loggers.values():
        logger.setLevel(level)


def reset_logging() -> None:
    """
    Return every vbam_cma logger to the stdlib defaults (for testing).

    Loggers propagate again at NOTSET without the shared handler, so
    pytest's caplog captures their records. The level override is cleared.
    """
    global _handler, _level_override

    for name, logger in logging.Logger.manager.loggerDict.items():
        if not isinstance(logger, logging.Logger):
            continue
        if name == "vbam_cma" or name.startswith("vbam_cma.") or name in _loggers:
            logger.propagate = True
            logger.setLevel(logging.NOTSET)
            if _handler is not None:
                logger.removeHandler(_handler)

    _handler = None
    _level_override = None
