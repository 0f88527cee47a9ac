"""FTP source over an already-connected :class:`ftplib.FTP` client."""

from __future__ import annotations

import ftplib
import logging
from io import BytesIO

from patchbay.adapters.base import require_identifier
from patchbay.domain.errors import AdapterError
from patchbay.domain.types import AdapterErrorKind

logger = logging.getLogger(__name__)

_NOT_FOUND_REPLY = "550"
# 500 command unrecognized, 501 bad parameters (e.g. an unusable path)
_SYNTAX_REPLIES = ("500", "501")


class FtpReaderAdapter:
    """Read blobs with ``RETR`` on a single FTP connection."""

    def __init__(self, client: ftplib.FTP) -> None:
        self._client = client

    def read(self, identifier: str) -> bytes:
        require_identifier(identifier)
        buffer = BytesIO()
        logger.debug("RETR %s", identifier)
        try:
            self._client.retrbinary(f"RETR {identifier}", buffer.write)
        except ftplib.error_perm as exc:
            if str(exc).startswith(_NOT_FOUND_REPLY):
                msg = f"No such remote file: {identifier}"
                raise AdapterError(AdapterErrorKind.NOT_FOUND, msg, identifier=identifier) from exc
            if str(exc).startswith(_SYNTAX_REPLIES):
                msg = f"FTP server rejected {identifier!r} as malformed: {exc}"
                raise AdapterError(AdapterErrorKind.MALFORMED, msg, identifier=identifier) from exc
            msg = f"FTP server refused {identifier}: {exc}"
            raise AdapterError(AdapterErrorKind.UNREACHABLE, msg, identifier=identifier) from exc
        except (ftplib.error_reply, ftplib.error_proto) as exc:
            msg = f"Unexpected FTP reply for {identifier}: {exc}"
            raise AdapterError(AdapterErrorKind.MALFORMED, msg, identifier=identifier) from exc
        except (ftplib.error_temp, OSError, EOFError) as exc:
            msg = f"FTP server unreachable while reading {identifier}: {exc}"
            raise AdapterError(AdapterErrorKind.UNREACHABLE, msg, identifier=identifier) from exc
        return buffer.getvalue()

    def close(self) -> None:
        """Close the FTP connection (best-effort QUIT first)."""
        try:
            self._client.quit()
        except (ftplib.Error, OSError, EOFError):
            logger.debug("FTP QUIT failed, closing socket", exc_info=True)
            self._client.close()
