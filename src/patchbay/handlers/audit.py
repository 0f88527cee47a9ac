"""Audit handler: one structured log event per successful operation."""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import BaseModel


def describe(value: Any) -> Any:
    """Reduce a handler value to something a log renderer can print."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (str, int, float, bool, dict, list, tuple)) or value is None:
        return value
    return repr(value)


class AuditLogHandler:
    """Log every value it receives at INFO on the ``patchbay.audit`` logger."""

    name = "audit"

    def __init__(self, logger_name: str = "patchbay.audit") -> None:
        self._log = structlog.get_logger(logger_name)

    def __call__(self, value: Any) -> None:
        self._log.info("operation.succeeded", value=describe(value))
