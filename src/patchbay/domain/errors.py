"""Exception taxonomy for the dispatch and notification core.

Every error carries a stable ``code`` that the service layer copies into
``ServiceError.code``. Adapter, dispatch and workflow errors propagate to
the immediate caller. ``HandlerError`` is never raised by the pipeline;
it is collected and reported next to a successful result.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, ClassVar

from patchbay.domain.types import AdapterErrorKind, PipelineState, WorkflowStep


class PatchbayError(Exception):
    """Base class for all patchbay errors."""

    code: str = "PATCHBAY_ERROR"

    def detail(self) -> dict[str, Any]:
        """Structured context for ``ServiceError.detail``."""
        return {}


class AdapterError(PatchbayError):
    """A backend read failed. ``kind`` says how."""

    code = "ADAPTER_ERROR"

    def __init__(
        self,
        kind: AdapterErrorKind,
        message: str,
        *,
        identifier: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.code = kind.upper()
        self.identifier = identifier

    def detail(self) -> dict[str, Any]:
        return {"kind": str(self.kind), "identifier": self.identifier}


class DispatchError(PatchbayError):
    """No handler is registered for a discriminator."""

    code = "UNKNOWN_KEY"

    def __init__(self, registry: str, key: object, available: Iterable[object] = ()) -> None:
        self.registry = registry
        self.key = key
        self.available = sorted(str(k) for k in available)
        super().__init__(
            f"No handler registered for {key!s} in {registry}. Available: {self.available}"
        )

    def detail(self) -> dict[str, Any]:
        return {"registry": self.registry, "key": str(self.key), "available": self.available}


class FetchError(PatchbayError):
    """A social backend call failed while fetching user data."""

    code = "FETCH_FAILED"


class WorkflowError(PatchbayError):
    """A workflow step failed. The whole aggregate is abandoned."""

    code = "STEP_FAILED"

    def __init__(self, step: WorkflowStep, cause: BaseException) -> None:
        self.step = step
        self.cause = cause
        super().__init__(f"Step {step} failed: {cause}")

    def detail(self) -> dict[str, Any]:
        return {
            "step": str(self.step),
            "cause": type(self.cause).__name__,
            "cause_code": getattr(self.cause, "code", None),
        }


class HandlerError(PatchbayError):
    """A post-operation handler raised. Non-fatal."""

    code = "HANDLER_FAILED"

    def __init__(self, handler: str, cause: BaseException) -> None:
        self.handler = handler
        self.cause = cause
        super().__init__(f"Handler {handler} failed: {cause}")

    def detail(self) -> dict[str, Any]:
        return {"handler": self.handler, "cause": type(self.cause).__name__}


class CoreError(PatchbayError):
    """The core operation of a pipeline run failed. No handler ran."""

    code = "CORE_FAILED"
    state: ClassVar[PipelineState] = PipelineState.CORE_FAILED

    def __init__(self, cause: BaseException, *, operation: str | None = None) -> None:
        self.cause = cause
        self.operation = operation
        label = operation or "core operation"
        super().__init__(f"{label} failed: {cause}")

    def detail(self) -> dict[str, Any]:
        detail: dict[str, Any] = {
            "operation": self.operation,
            "cause": type(self.cause).__name__,
        }
        cause_code = getattr(self.cause, "code", None)
        if cause_code is not None:
            detail["cause_code"] = cause_code
        return detail


class ConfigurationError(PatchbayError):
    """Configuration names something that cannot be built."""

    code = "CONFIG_ERROR"
