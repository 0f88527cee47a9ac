"""The blob-reading capability every source adapter satisfies."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from patchbay.domain.errors import AdapterError
from patchbay.domain.types import AdapterErrorKind


@runtime_checkable
class BlobReader(Protocol):
    """Read a blob of data by identifier.

    Implementations perform exactly one backend call per ``read()`` and
    raise :class:`AdapterError` for every failure. No caching, no retry.
    """

    def read(self, identifier: str) -> bytes: ...


def require_identifier(identifier: str) -> str:
    """Reject empty or blank identifiers before any backend call."""
    if not isinstance(identifier, str) or not identifier.strip():
        msg = "Identifier must be a non-empty string"
        raise AdapterError(AdapterErrorKind.MALFORMED, msg, identifier=identifier or None)
    return identifier
