"""Logging setup: structlog rendering over the stdlib ``logging`` tree.

patchbay logs two ways. Adapters, services and the hub use
``logging.getLogger(__name__)``; the pipeline, registry and audit handler
emit keyed events through ``structlog.get_logger``. Both reach one stderr
handler and share a processor chain, so ``operation``, ``handler`` and
``state`` fields come out the same in either renderer:

- console (default): ``structlog.dev.ConsoleRenderer``
- JSON lines (``--log-json``): one object per record, tracebacks as dicts
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

# Client libraries driven by the readers, social clients and record store,
# as (default level, level under -v). httpx request lines help diagnose
# UNREACHABLE reads; SQL echo is never wanted.
BACKEND_LOG_LEVELS: dict[str, tuple[int, int]] = {
    "httpx": (logging.WARNING, logging.INFO),
    "httpcore": (logging.WARNING, logging.WARNING),
    "sqlalchemy.engine": (logging.WARNING, logging.WARNING),
}


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(*, log_json: bool, stream: TextIO) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=stream.isatty())]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route patchbay and backend logging to *stream* (default: stderr).

    Args:
        verbose: ``patchbay`` loggers at DEBUG instead of WARNING, and
            backend loggers at their verbose level.
        log_json: Render JSON lines instead of console text.
        stream: Destination for all records.
    """
    out = stream or sys.stderr
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderer(log_json=log_json, stream=out),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("patchbay").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, (default, when_verbose) in BACKEND_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(when_verbose if verbose else default)
