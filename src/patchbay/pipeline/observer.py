"""Observer fan-out: handlers register against a shared PluginManager.

Suited to handler sets that change at runtime. Each ``execute`` takes a
snapshot of the registered hook implementations before the core runs;
handlers registered later never join that run.
"""

from __future__ import annotations

from typing import Any

from patchbay.domain.errors import HandlerError
from patchbay.domain.types import PassValue
from patchbay.pipeline.base import (
    CoreOperation,
    Handler,
    PipelineOutcome,
    completed,
    invoke_handler,
    run_core,
    select_value,
)
from patchbay.plugins.manager import PluginManager


class ObserverPipeline:
    """Notification pipeline composed by fan-out over pluggy hooks.

    Parameters:
        core: The operation whose success triggers handlers.
        operation: Name passed to ``post_execute`` implementations.
        pass_value: Whether handlers receive the core output or the payload.
        plugin_manager: Shared registry. A private one is created if omitted.
    """

    def __init__(
        self,
        core: CoreOperation,
        *,
        operation: str = "execute",
        pass_value: PassValue = PassValue.OUTPUT,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self._core = core
        self._operation = operation
        self._pass_value = PassValue(pass_value)
        self._pm = plugin_manager or PluginManager()

    @property
    def operation(self) -> str:
        return self._operation

    @property
    def plugin_manager(self) -> PluginManager:
        return self._pm

    def register(self, handler: Handler | object, *, name: str | None = None) -> str:
        """Register a callable or a plugin carrying a ``post_execute`` hookimpl."""
        return self._pm.register_plugin(handler, name=name)

    def unregister(self, handler: object) -> bool:
        return self._pm.unregister(handler)

    def handler_names(self) -> list[str]:
        return self._pm.list_plugin_names()

    def execute(self, payload: Any) -> PipelineOutcome:
        """Run the core, then fan out to the handlers registered at call start."""
        impls = self._pm.snapshot()
        output = run_core(self._operation, self._core, payload)
        value = select_value(self._pass_value, payload, output)
        kwargs = {"operation": self._operation, "value": value}

        invoked: list[str] = []
        diagnostics: list[HandlerError] = []
        for impl in impls:
            args = [kwargs[argname] for argname in impl.argnames]
            failure = invoke_handler(
                self._operation,
                impl.plugin_name,
                lambda impl=impl, args=args: impl.function(*args),
            )
            invoked.append(impl.plugin_name)
            if failure is not None:
                diagnostics.append(failure)
        return completed(self._operation, output, invoked, diagnostics)
