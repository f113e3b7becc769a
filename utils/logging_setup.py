from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

from config.settings import get_settings


_INITIALIZED: bool = False

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "entity=%(entity)s operation=%(operation)s identity=%(identity)s "
    "status=%(status)s error=%(error)s"
)


class SafeExtraFormatter(logging.Formatter):
    """Formatter that tolerates missing extra fields by injecting defaults."""

    DEFAULTS: dict[str, Any] = {
        "entity": "-",
        "operation": "-",
        "identity": "-",
        "status": "-",
        "error": "-",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        for key, value in self.DEFAULTS.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return super().format(record)


def log_extra(
    entity: str,
    operation: str,
    identity: Any = None,
    status: Optional[str] = None,
    error: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a record-service log line; unset keys fall back to the formatter defaults."""
    extra: Dict[str, Any] = {"entity": entity, "operation": operation}
    if identity is not None:
        extra["identity"] = identity
    if status is not None:
        extra["status"] = status
    if error is not None:
        extra["error"] = error
    return extra


def init_logging(level: str | None = None) -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return

    log_level_str = (level or get_settings().log_level).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not root_logger.handlers:
        # stdout carries command output
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        handler.setFormatter(SafeExtraFormatter(fmt=LOG_FORMAT))
        root_logger.addHandler(handler)

    _INITIALIZED = True
