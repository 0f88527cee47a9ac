"""Pluggy hook specifications for post-operation handlers."""

from __future__ import annotations

from typing import Any

import pluggy

PROJECT_NAME = "patchbay"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class PatchbayHookSpec:
    """Hook specifications for the patchbay observer pipeline."""

    @hookspec
    def post_execute(self, operation: str, value: Any) -> None:
        """Called after a core operation succeeded.

        *value* is the core output or the original payload, depending on
        pipeline configuration. Implementations may accept only the
        arguments they need.
        """
