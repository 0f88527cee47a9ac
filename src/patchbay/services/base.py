"""BaseService — abstract foundation for all patchbay services.

Every service receives a :class:`Hub` at construction time. The Hub
provides the dispatch registries, the record store and the pipelines.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from patchbay.infrastructure.hub import Hub
    from patchbay.pipeline import CoreOperation

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class RecordService(BaseService):
            def save(self, kind: str, data: dict) -> ServiceResult:
                warnings: list[str] = []
                record = self._run_pipeline("save_record", self._save, {...}, warnings)
                ...
    """

    def __init__(self, hub: Hub) -> None:
        self._hub = hub

    def _run_pipeline(
        self,
        operation: str,
        core: CoreOperation,
        payload: Any,
        warnings: list[str],
        meta: dict[str, Any] | None = None,
    ) -> Any:
        """Execute *operation* through its notification pipeline.

        Handler failures are appended to *warnings*. A core failure raises
        :class:`~patchbay.domain.errors.CoreError`.

        INVARIANT: Handler failures are warnings, never errors.
        """
        pipeline = self._hub.pipeline(operation, core)
        outcome = pipeline.execute(payload)
        warnings.extend(outcome.warnings)
        if meta is not None:
            meta["handlers"] = list(outcome.invoked)
        if outcome.diagnostics:
            logger.debug(
                "%s completed with %d handler failure(s)", operation, len(outcome.diagnostics)
            )
        return outcome.output
