"""ImportService — the log importer.

The importer itself is sealed: read one blob, parse it, return the
entries. Which backend the blob comes from is decided by the reader
registry, and what happens afterwards by the ``import_log`` pipeline.
"""

from __future__ import annotations

from typing import Any

from patchbay.domain.errors import PatchbayError
from patchbay.domain.logs import parse_log
from patchbay.domain.records import ImportedLog
from patchbay.services.base import BaseService
from patchbay.services.contracts import ImportLogResultData, dump_validated
from patchbay.services.result import ServiceResult, error_result


class ImportService(BaseService):
    """Import log files from any registered source."""

    def import_log(self, source: str, identifier: str) -> ServiceResult:
        op = "import_log"
        warnings: list[str] = []
        meta: dict[str, Any] = {}
        payload = {"source": str(source), "identifier": identifier}
        try:
            imported: ImportedLog = self._run_pipeline(op, self._import, payload, warnings, meta)
        except PatchbayError as exc:
            return error_result(op, exc, warnings=warnings)

        data = {
            "source": imported.source,
            "identifier": imported.identifier,
            "count": len(imported.entries),
            "levels": imported.level_counts(),
            "items": [entry.model_dump() for entry in imported.entries],
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(ImportLogResultData, data),
            warnings=warnings,
            meta=meta,
        )

    def _import(self, payload: dict[str, str]) -> ImportedLog:
        source, identifier = payload["source"], payload["identifier"]
        blob = self._hub.readers.dispatch(source, identifier)
        entries = parse_log(blob, identifier=identifier)
        return ImportedLog(source=source, identifier=identifier, entries=tuple(entries))
