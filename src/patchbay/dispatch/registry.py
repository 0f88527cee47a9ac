"""StrategyRegistry — a keyed catalog of interchangeable handlers.

The registry holds no business logic: ``dispatch`` is a lookup followed
by a call. An unknown key is always a :class:`DispatchError`, never an
empty result.

Re-registering a key replaces the previous handler (last write wins).
"""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterator
from typing import Any

import structlog

from patchbay.domain.errors import DispatchError

logger = structlog.get_logger(__name__)


class StrategyRegistry[K: Hashable, H]:
    """Map discriminator values to handlers.

    Parameters:
        name: Label used in errors and log events.
        method: When set, ``dispatch`` calls this attribute of the handler
            instead of the handler itself (for interface-typed handlers
            such as ``BlobReader.read``).

    Usage::

        readers = StrategyRegistry[SourceKind, BlobReader]("readers", method="read")
        readers.register(SourceKind.FILE, FileReaderAdapter(root))
        data = readers.dispatch(SourceKind.FILE, "logs/app.log")
    """

    def __init__(self, name: str = "registry", *, method: str | None = None) -> None:
        self._name = name
        self._method = method
        self._handlers: dict[K, H] = {}
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    def register(self, key: K, handler: H) -> None:
        """Register *handler* for *key*, replacing any previous handler."""
        with self._lock:
            replacing = key in self._handlers
            previous = self._handlers.get(key)
            self._handlers[key] = handler
        if replacing and previous is not handler:
            logger.debug(
                "handler_replaced",
                registry=self._name,
                key=str(key),
                old=type(previous).__name__,
                new=type(handler).__name__,
            )
        else:
            logger.debug("handler_registered", registry=self._name, key=str(key))

    def resolve(self, key: K) -> H:
        """Return the handler for *key* or raise :class:`DispatchError`."""
        with self._lock:
            if key not in self._handlers:
                raise DispatchError(self._name, key, self._handlers.keys())
            return self._handlers[key]

    def dispatch(self, key: K, *args: Any, **kwargs: Any) -> Any:
        """Resolve *key* and call its handler. Handler exceptions propagate."""
        handler = self.resolve(key)
        target = getattr(handler, self._method) if self._method else handler
        return target(*args, **kwargs)

    def keys(self) -> list[K]:
        with self._lock:
            return list(self._handlers)

    def values(self) -> list[H]:
        with self._lock:
            return list(self._handlers.values())

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._handlers

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())
