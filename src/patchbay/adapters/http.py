"""HTTP source over an :class:`httpx.Client`.

Identifiers are URLs, or paths relative to the client's ``base_url``.
"""

from __future__ import annotations

import logging

import httpx

from patchbay.adapters.base import require_identifier
from patchbay.domain.errors import AdapterError
from patchbay.domain.types import AdapterErrorKind

logger = logging.getLogger(__name__)

_NOT_FOUND_STATUSES = frozenset({404, 410})
_MALFORMED_STATUSES = frozenset({400, 414, 422})


def classify_status(status_code: int) -> AdapterErrorKind:
    """Map an HTTP error status to an adapter error kind."""
    if status_code in _NOT_FOUND_STATUSES:
        return AdapterErrorKind.NOT_FOUND
    if status_code in _MALFORMED_STATUSES:
        return AdapterErrorKind.MALFORMED
    return AdapterErrorKind.UNREACHABLE


class HttpReaderAdapter:
    """Read blobs with a single ``GET`` per identifier."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def read(self, identifier: str) -> bytes:
        require_identifier(identifier)
        try:
            response = self._client.get(identifier)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            msg = f"Invalid URL {identifier!r}: {exc}"
            raise AdapterError(AdapterErrorKind.MALFORMED, msg, identifier=identifier) from exc
        except httpx.TransportError as exc:
            msg = f"HTTP transport failed for {identifier}: {exc}"
            raise AdapterError(AdapterErrorKind.UNREACHABLE, msg, identifier=identifier) from exc
        except httpx.DecodingError as exc:
            msg = f"Undecodable response body for {identifier}: {exc}"
            raise AdapterError(AdapterErrorKind.MALFORMED, msg, identifier=identifier) from exc
        except httpx.HTTPError as exc:
            msg = f"HTTP request failed for {identifier}: {exc}"
            raise AdapterError(AdapterErrorKind.UNREACHABLE, msg, identifier=identifier) from exc

        logger.debug("GET %s -> %s", response.request.url, response.status_code)
        if response.is_error:
            kind = classify_status(response.status_code)
            msg = f"GET {identifier} returned HTTP {response.status_code}"
            raise AdapterError(kind, msg, identifier=identifier)
        return response.content

    def close(self) -> None:
        self._client.close()
