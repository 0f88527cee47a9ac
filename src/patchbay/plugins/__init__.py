"""Observer registry — post-operation handlers via pluggy.

No discovery: handlers are registered explicitly by code.
INVARIANT: Handler failures are warnings, never errors.
"""

from patchbay.plugins.hookspecs import hookimpl
from patchbay.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
