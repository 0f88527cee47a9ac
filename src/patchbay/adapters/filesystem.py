"""Local filesystem source."""

from __future__ import annotations

import logging
from pathlib import Path

from patchbay.adapters.base import require_identifier
from patchbay.domain.errors import AdapterError
from patchbay.domain.types import AdapterErrorKind

logger = logging.getLogger(__name__)


class FileReaderAdapter:
    """Read blobs from files under a root directory.

    Identifiers are paths relative to *root*. Paths that resolve outside
    the root are rejected as malformed.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def read(self, identifier: str) -> bytes:
        require_identifier(identifier)
        path = self._resolve(identifier)
        logger.debug("Reading file %s", path)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            msg = f"No such file: {identifier}"
            raise AdapterError(AdapterErrorKind.NOT_FOUND, msg, identifier=identifier) from exc
        except OSError as exc:
            msg = f"Cannot read {identifier}: {exc.strerror or exc}"
            raise AdapterError(AdapterErrorKind.UNREACHABLE, msg, identifier=identifier) from exc

    def close(self) -> None:
        """Nothing to release for local files."""

    def _resolve(self, identifier: str) -> Path:
        root = self._root.resolve()
        candidate = (root / identifier).resolve()
        # Guard against path traversal via ``..`` or absolute identifiers
        if not candidate.is_relative_to(root):
            msg = f"Path escapes source root: {identifier}"
            raise AdapterError(AdapterErrorKind.MALFORMED, msg, identifier=identifier)
        return candidate
