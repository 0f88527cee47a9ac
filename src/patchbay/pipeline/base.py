"""The notification pipeline contract shared by both composition strategies.

A run goes ``IDLE → RUNNING → COMPLETED`` or ``IDLE → RUNNING → CORE_FAILED``:

1. The core operation runs. If it raises, :class:`CoreError` propagates
   and no handler runs.
2. Every handler in the run's snapshot is invoked in registration order
   with the core output (or the original payload, per ``PassValue``).
3. A failing handler is logged and recorded as a :class:`HandlerError`.
   Later handlers still run and the core output is returned unchanged.

Only terminal states are reported to callers: a returned
:class:`PipelineOutcome` is ``COMPLETED`` and a raised :class:`CoreError` is
``CORE_FAILED``. ``RUNNING`` and the terminal states also appear as the
``state`` field of the ``pipeline.*`` log events. ``IDLE`` is never
reported.

INVARIANT: Handler failures are warnings, never errors.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import structlog

from patchbay.domain.errors import CoreError, HandlerError
from patchbay.domain.types import PassValue, PipelineState

logger = structlog.get_logger(__name__)

CoreOperation = Callable[[Any], Any]
Handler = Callable[[Any], object]


@dataclass(frozen=True)
class PipelineOutcome:
    """Result of a successful pipeline run.

    Attributes:
        output: Whatever the core operation returned.
        diagnostics: One :class:`HandlerError` per failed handler, in
            invocation order.
        invoked: Names of all handlers that were invoked, in order.
    """

    output: Any
    diagnostics: tuple[HandlerError, ...] = ()
    invoked: tuple[str, ...] = ()
    state: PipelineState = PipelineState.COMPLETED

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.COMPLETED

    @property
    def warnings(self) -> list[str]:
        """Handler failures rendered as warning strings."""
        return [str(diag) for diag in self.diagnostics]


@runtime_checkable
class NotificationPipeline(Protocol):
    """Core operation plus an ordered, mutable set of post-operation handlers."""

    @property
    def operation(self) -> str: ...

    def register(self, handler: Handler, *, name: str | None = None) -> str: ...

    def unregister(self, handler: object) -> bool: ...

    def handler_names(self) -> list[str]: ...

    def execute(self, payload: Any) -> PipelineOutcome: ...


def run_core(operation: str, core: CoreOperation, payload: Any) -> Any:
    """Run the core step of a pipeline, translating failure into :class:`CoreError`."""
    logger.debug("pipeline.running", operation=operation, state=PipelineState.RUNNING)
    try:
        output = core(payload)
    except Exception as exc:
        logger.debug(
            "pipeline.core_failed",
            operation=operation,
            state=PipelineState.CORE_FAILED,
            error=str(exc),
        )
        raise CoreError(exc, operation=operation) from exc
    return output


def select_value(pass_value: PassValue, payload: Any, output: Any) -> Any:
    """Pick what handlers receive."""
    return payload if pass_value is PassValue.PAYLOAD else output


def invoke_handler(
    operation: str,
    name: str,
    call: Callable[[], object],
) -> HandlerError | None:
    """Invoke one handler, isolating its failure."""
    try:
        call()
    except Exception as exc:
        logger.warning(
            "pipeline.handler_failed",
            operation=operation,
            handler=name,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return HandlerError(name, exc)
    return None


def completed(
    operation: str,
    output: Any,
    invoked: list[str],
    diagnostics: list[HandlerError],
) -> PipelineOutcome:
    """Build the outcome of a finished run."""
    logger.debug(
        "pipeline.completed",
        operation=operation,
        state=PipelineState.COMPLETED,
        handlers=len(invoked),
        failures=len(diagnostics),
    )
    return PipelineOutcome(
        output=output,
        diagnostics=tuple(diagnostics),
        invoked=tuple(invoked),
    )
