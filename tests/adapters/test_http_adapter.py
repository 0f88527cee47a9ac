"""Tests for HttpReaderAdapter over httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from patchbay.adapters import HttpReaderAdapter
from patchbay.adapters.http import classify_status
from patchbay.domain.errors import AdapterError
from patchbay.domain.types import AdapterErrorKind


class RecordingTransport(httpx.MockTransport):
    """MockTransport answering ``statuses[path]`` (default 200) and keeping requests."""

    def __init__(self, statuses: dict[str, int] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.statuses = statuses or {}
        super().__init__(self._respond)

    def _respond(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status = self.statuses.get(request.url.path, 200)
        return httpx.Response(status, content=b"body:" + request.url.path.encode())


def _client(transport: httpx.BaseTransport) -> httpx.Client:
    return httpx.Client(transport=transport, base_url="https://src.test")


class TestHttpReaderAdapter:
    def test_reads_content(self) -> None:
        adapter = HttpReaderAdapter(_client(RecordingTransport()))
        assert adapter.read("/logs/app.log") == b"body:/logs/app.log"

    def test_exactly_one_request(self) -> None:
        transport = RecordingTransport()
        HttpReaderAdapter(_client(transport)).read("/a")
        assert len(transport.requests) == 1

    @pytest.mark.parametrize(
        ("status", "kind"),
        [
            (404, AdapterErrorKind.NOT_FOUND),
            (410, AdapterErrorKind.NOT_FOUND),
            (400, AdapterErrorKind.MALFORMED),
            (422, AdapterErrorKind.MALFORMED),
            (500, AdapterErrorKind.UNREACHABLE),
            (503, AdapterErrorKind.UNREACHABLE),
            (403, AdapterErrorKind.UNREACHABLE),
        ],
    )
    def test_status_mapping(self, status: int, kind: AdapterErrorKind) -> None:
        adapter = HttpReaderAdapter(_client(RecordingTransport({"/target": status})))
        with pytest.raises(AdapterError) as exc_info:
            adapter.read("/target")
        assert exc_info.value.kind is kind
        assert exc_info.value.identifier == "/target"

    def test_transport_error_is_unreachable(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        adapter = HttpReaderAdapter(_client(httpx.MockTransport(refuse)))
        with pytest.raises(AdapterError) as exc_info:
            adapter.read("/a")
        assert exc_info.value.kind is AdapterErrorKind.UNREACHABLE
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_redirect_loop_is_unreachable(self) -> None:
        def loop(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"location": "/loop"})

        client = httpx.Client(
            transport=httpx.MockTransport(loop),
            base_url="https://src.test",
            follow_redirects=True,
        )
        with pytest.raises(AdapterError) as exc_info:
            HttpReaderAdapter(client).read("/loop")
        assert exc_info.value.kind is AdapterErrorKind.UNREACHABLE
        assert isinstance(exc_info.value.__cause__, httpx.TooManyRedirects)

    def test_undecodable_body_is_malformed(self) -> None:
        def bad_gzip(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, headers={"content-encoding": "gzip"}, content=b"not gzip at all"
            )

        adapter = HttpReaderAdapter(_client(httpx.MockTransport(bad_gzip)))
        with pytest.raises(AdapterError) as exc_info:
            adapter.read("/a")
        assert exc_info.value.kind is AdapterErrorKind.MALFORMED
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    def test_unsupported_scheme_is_malformed(self) -> None:
        adapter = HttpReaderAdapter(httpx.Client())
        with pytest.raises(AdapterError) as exc_info:
            adapter.read("gopher://example.test/x")
        assert exc_info.value.kind is AdapterErrorKind.MALFORMED

    def test_blank_identifier_makes_no_request(self) -> None:
        transport = RecordingTransport()
        with pytest.raises(AdapterError) as exc_info:
            HttpReaderAdapter(_client(transport)).read(" ")
        assert exc_info.value.kind is AdapterErrorKind.MALFORMED
        assert transport.requests == []

    def test_close_closes_client(self) -> None:
        client = _client(RecordingTransport())
        HttpReaderAdapter(client).close()
        assert client.is_closed


class TestClassifyStatus:
    def test_uri_too_long_is_malformed(self) -> None:
        assert classify_status(414) is AdapterErrorKind.MALFORMED
