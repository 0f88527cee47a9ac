"""ReadService — read a raw blob from any registered source."""

from __future__ import annotations

import hashlib

from patchbay.domain.errors import PatchbayError
from patchbay.services.base import BaseService
from patchbay.services.contracts import ReadResultData, dump_validated
from patchbay.services.result import ServiceResult, error_result


class ReadService(BaseService):
    """Single blob reads through the reader registry. No side effects."""

    def read(self, source: str, identifier: str) -> ServiceResult:
        op = "read"
        try:
            blob: bytes = self._hub.readers.dispatch(source, identifier)
        except PatchbayError as exc:
            return error_result(op, exc)

        try:
            text: str | None = blob.decode("utf-8")
        except UnicodeDecodeError:
            text = None

        data = {
            "source": str(source),
            "identifier": identifier,
            "size": len(blob),
            "sha256": hashlib.sha256(blob).hexdigest(),
            "text": text,
        }
        return ServiceResult(ok=True, op=op, data=dump_validated(ReadResultData, data))
