"""Handler registration on top of a pluggy PluginManager.

Pluggy calls hook implementations last-registered-first and stops at the
first exception. The observer pipeline needs the opposite on both counts,
so it never calls ``pm.hook.post_execute(...)`` directly. Instead it takes
a :meth:`PluginManager.snapshot` of the implementations (registration
order) and invokes each one itself.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Set as AbstractSet
from typing import Any

import pluggy

from patchbay.plugins.hookspecs import PROJECT_NAME, PatchbayHookSpec, hookimpl

logger = logging.getLogger(__name__)

HOOK_NAME = "post_execute"


class CallbackPlugin:
    """Adapt a plain ``handler(value)`` callable into a pluggy plugin."""

    def __init__(self, callback: Callable[[Any], object]) -> None:
        self.callback = callback

    @hookimpl
    def post_execute(self, value: Any) -> None:
        self.callback(value)

    def __repr__(self) -> str:
        return f"CallbackPlugin({self.callback!r})"


class PluginManager:
    """Thread-safe handler registry backed by :class:`pluggy.PluginManager`.

    Registration, unregistration and :meth:`snapshot` are serialized by a
    single lock, so a snapshot always reflects a complete registry state.
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PatchbayHookSpec)
        self._lock = threading.RLock()

    def register_plugin(self, plugin: object, name: str | None = None) -> str:
        """Register a handler plugin and return its name.

        Plain callables without a ``post_execute`` hook implementation are
        wrapped in :class:`CallbackPlugin`.

        Raises:
            ValueError: If an explicit *name* (or the same plugin object) is
                already registered. Default names get a ``#N`` suffix instead.
            TypeError: If *plugin* is neither a hook implementation nor callable.
        """
        if not self._has_hook_impls(type(plugin)):
            if not callable(plugin):
                msg = f"Handler {plugin!r} is not callable and has no {HOOK_NAME} hook"
                raise TypeError(msg)
            target: object = CallbackPlugin(plugin)
        else:
            target = plugin
        with self._lock:
            if not name:
                taken = {registered_name for registered_name, _ in self._pm.list_name_plugin()}
                name = unique_name(handler_name(plugin), taken)
            registered = self._pm.register(target, name=name)
        if registered is None:
            msg = f"Handler {name} is blocked"
            raise ValueError(msg)
        logger.debug("Registered handler: %s", registered)
        return registered

    def unregister(self, handler: object) -> bool:
        """Unregister by name, plugin object, or the original callable.

        Returns ``False`` if nothing matched.
        """
        with self._lock:
            name = self.find_name(handler)
            if name is None:
                return False
            self._pm.unregister(name=name)
        logger.debug("Unregistered handler: %s", name)
        return True

    def find_name(self, handler: object) -> str | None:
        """Resolve the registered name for a handler, plugin or name."""
        with self._lock:
            if isinstance(handler, str):
                return handler if self._pm.has_plugin(handler) else None
            for name, plugin in self._pm.list_name_plugin():
                if plugin is handler or getattr(plugin, "callback", None) is handler:
                    return name
        return None

    def snapshot(self) -> list[pluggy.HookImpl]:
        """Return the current ``post_execute`` implementations in registration order."""
        with self._lock:
            return list(getattr(self._pm.hook, HOOK_NAME).get_hookimpls())

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        with self._lock:
            return [plugin for _, plugin in self._pm.list_name_plugin()]

    def list_plugin_names(self) -> list[str]:
        """Return names of registered handlers in invocation order."""
        return [impl.plugin_name for impl in self.snapshot()]

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has a method decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("patchbay")`` sets a ``patchbay_impl``
        attribute on decorated methods.
        """
        method = getattr(cls, HOOK_NAME, None)
        return callable(method) and getattr(method, f"{PROJECT_NAME}_impl", None) is not None


def handler_name(handler: object) -> str:
    """Default registration name: ``name`` attribute, qualname, or class name."""
    explicit = getattr(handler, "name", None)
    if isinstance(explicit, str) and explicit:
        return explicit
    qualname = getattr(handler, "__qualname__", None)
    if isinstance(qualname, str):
        return qualname
    return type(handler).__name__


def unique_name(base: str, taken: AbstractSet[str]) -> str:
    """Return *base*, or *base* with the first free ``#N`` suffix."""
    if base not in taken:
        return base
    n = 2
    while f"{base}#{n}" in taken:
        n += 1
    return f"{base}#{n}"
