"""RecordService — the record saver.

Saving is the core operation; mail, cache and audit side effects are
handlers on the ``save_record`` pipeline and only run after the insert
has committed.
"""

from __future__ import annotations

from typing import Any

from patchbay.domain.errors import PatchbayError
from patchbay.infrastructure.store import StoredRecord
from patchbay.services.base import BaseService
from patchbay.services.contracts import RecordData, dump_validated
from patchbay.services.result import ServiceError, ServiceResult, error_result


class RecordService(BaseService):
    """Persist records and fan out notifications."""

    def save(self, kind: str, data: dict[str, Any]) -> ServiceResult:
        op = "save_record"
        warnings: list[str] = []
        meta: dict[str, Any] = {}
        payload = {"kind": kind, "payload": data}
        try:
            record: StoredRecord = self._run_pipeline(op, self._save, payload, warnings, meta)
        except PatchbayError as exc:
            return error_result(op, exc, warnings=warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(RecordData, record.to_dict()),
            warnings=warnings,
            meta=meta,
        )

    def get(self, record_id: int) -> ServiceResult:
        op = "get_record"
        record = self._hub.store.get(record_id)
        if record is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="NOT_FOUND",
                    message=f"No record found with ID: {record_id}",
                ),
            )
        return ServiceResult(ok=True, op=op, data=dump_validated(RecordData, record.to_dict()))

    def _save(self, payload: dict[str, Any]) -> StoredRecord:
        return self._hub.store.save(payload["kind"], payload["payload"])
