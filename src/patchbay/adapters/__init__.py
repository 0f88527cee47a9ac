"""Capability adapters — one backend client each, one contract for all.

INVARIANT: No backend-specific type or exception crosses ``read()``.
"""

from patchbay.adapters.base import BlobReader, require_identifier
from patchbay.adapters.filesystem import FileReaderAdapter
from patchbay.adapters.ftp import FtpReaderAdapter
from patchbay.adapters.http import HttpReaderAdapter

__all__ = [
    "BlobReader",
    "FileReaderAdapter",
    "FtpReaderAdapter",
    "HttpReaderAdapter",
    "require_identifier",
]
