"""Chained decoration: every handler wraps the chain built before it.

``register`` builds a new :class:`HandlerLink` around the current chain and
swaps it in. Links are immutable, so a run that already picked up the
chain keeps seeing exactly the handlers it started with.
``unregister`` rebuilds the chain without the removed link.

Links are walked with a loop rather than by recursing through ``inner``,
so chain depth is bounded only by memory.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
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
from patchbay.plugins.manager import handler_name, unique_name

# (output, invoked handler names, handler failures)
LinkResult = tuple[Any, list[str], list[HandlerError]]


@dataclass(frozen=True)
class CoreLink:
    """Innermost link: runs the core operation."""

    operation: str
    core: CoreOperation

    def __call__(self, payload: Any) -> LinkResult:
        return run_core(self.operation, self.core, payload), [], []

    def links(self) -> list[HandlerLink]:
        return []


@dataclass(frozen=True, eq=False)
class HandlerLink:
    """Decorates *inner*: run it, then run one handler on its output."""

    inner: CoreLink | HandlerLink = field(repr=False)
    name: str
    handler: Handler
    pass_value: PassValue = PassValue.OUTPUT

    def __call__(self, payload: Any) -> LinkResult:
        core, links = unwind(self)
        output, invoked, diagnostics = core(payload)
        for link in links:
            failure = link.notify(core.operation, payload, output)
            invoked.append(link.name)
            if failure is not None:
                diagnostics.append(failure)
        return output, invoked, diagnostics

    def notify(self, operation: str, payload: Any, output: Any) -> HandlerError | None:
        """Run this link's handler alone, isolating its failure."""
        value = select_value(self.pass_value, payload, output)
        return invoke_handler(operation, self.name, lambda: self.handler(value))

    @property
    def operation(self) -> str:
        return unwind(self)[0].operation

    def links(self) -> list[HandlerLink]:
        """All handler links from innermost to this one."""
        return unwind(self)[1]


def unwind(chain: CoreLink | HandlerLink) -> tuple[CoreLink, list[HandlerLink]]:
    """Split *chain* into its core and its handler links, innermost first."""
    links: list[HandlerLink] = []
    link = chain
    while isinstance(link, HandlerLink):
        links.append(link)
        link = link.inner
    links.reverse()
    return link, links


def decorate(
    chain: CoreLink | HandlerLink,
    handler: Handler,
    *,
    name: str | None = None,
    pass_value: PassValue = PassValue.OUTPUT,
) -> HandlerLink:
    """Wrap *chain* with one more handler."""
    return HandlerLink(
        inner=chain,
        name=name or handler_name(handler),
        handler=handler,
        pass_value=pass_value,
    )


class ChainedPipeline:
    """Notification pipeline composed by nested decoration."""

    def __init__(
        self,
        core: CoreOperation,
        *,
        operation: str = "execute",
        pass_value: PassValue = PassValue.OUTPUT,
    ) -> None:
        self._operation = operation
        self._pass_value = PassValue(pass_value)
        self._core = CoreLink(operation, core)
        self._chain: CoreLink | HandlerLink = self._core
        self._lock = threading.Lock()

    @property
    def operation(self) -> str:
        return self._operation

    @property
    def chain(self) -> CoreLink | HandlerLink:
        """The current outermost link."""
        with self._lock:
            return self._chain

    def register(self, handler: Handler, *, name: str | None = None) -> str:
        """Wrap the current chain with *handler*. Returns the handler name.

        Without *name* the default from :func:`handler_name` is used,
        suffixed with ``#N`` if it is already taken. An explicit *name*
        that is already taken raises ``ValueError``.
        """
        if not callable(handler):
            msg = f"Handler {handler!r} is not callable"
            raise TypeError(msg)
        with self._lock:
            taken = set(self._names(self._chain))
            if not name:
                resolved = unique_name(handler_name(handler), taken)
            elif name in taken:
                msg = f"Handler name already registered: {name}"
                raise ValueError(msg)
            else:
                resolved = name
            self._chain = decorate(
                self._chain, handler, name=resolved, pass_value=self._pass_value
            )
        return resolved

    def unregister(self, handler: object) -> bool:
        """Remove a handler by name or by the registered callable."""
        with self._lock:
            links = self._chain.links()
            keep = [link for link in links if not _matches(link, handler)]
            if len(keep) == len(links):
                return False
            chain: CoreLink | HandlerLink = self._core
            for link in keep:
                chain = decorate(chain, link.handler, name=link.name, pass_value=link.pass_value)
            self._chain = chain
        return True

    def handler_names(self) -> list[str]:
        with self._lock:
            return self._names(self._chain)

    def execute(self, payload: Any) -> PipelineOutcome:
        """Run the core and every handler in the chain as it stands now."""
        chain = self.chain
        output, invoked, diagnostics = chain(payload)
        return completed(self._operation, output, invoked, diagnostics)

    @staticmethod
    def _names(chain: CoreLink | HandlerLink) -> list[str]:
        return [link.name for link in chain.links()]


def _matches(link: HandlerLink, handler: object) -> bool:
    if isinstance(handler, str):
        return link.name == handler
    return link.handler is handler
