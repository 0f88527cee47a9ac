"""Tests for JsonApiSocialClient over httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from patchbay.domain.errors import FetchError
from patchbay.workflow.clients import JsonApiSocialClient


def _client(handler: httpx.MockTransport) -> JsonApiSocialClient:
    return JsonApiSocialClient(httpx.Client(transport=handler, base_url="https://api.test/v1"))


def _routes(routes: dict[str, httpx.Response]) -> httpx.MockTransport:
    def respond(request: httpx.Request) -> httpx.Response:
        return routes.get(request.url.path, httpx.Response(404))

    return httpx.MockTransport(respond)


class TestJsonApiSocialClient:
    def test_get_user(self) -> None:
        client = _client(_routes({"/v1/users/1": httpx.Response(200, json={"id": 1, "name": "A"})}))
        assert client.get_user("1") == {"id": 1, "name": "A"}

    def test_get_friends_list(self) -> None:
        friends = [{"id": 2}, {"id": 3}]
        client = _client(_routes({"/v1/users/1/friends": httpx.Response(200, json=friends)}))
        assert client.get_friends("1") == friends

    def test_get_friends_items_envelope(self) -> None:
        body = {"count": 1, "items": [{"id": 2}]}
        client = _client(_routes({"/v1/users/1/friends": httpx.Response(200, json=body)}))
        assert client.get_friends("1") == [{"id": 2}]

    def test_http_error_is_fetch_error(self) -> None:
        with pytest.raises(FetchError, match="HTTP 404"):
            _client(_routes({})).get_user("404")

    def test_transport_error_is_fetch_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(FetchError) as exc_info:
            _client(httpx.MockTransport(refuse)).get_friends("1")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)

    def test_invalid_json_is_fetch_error(self) -> None:
        client = _client(_routes({"/v1/users/1": httpx.Response(200, content=b"<html>")}))
        with pytest.raises(FetchError, match="invalid JSON"):
            client.get_user("1")

    def test_non_object_user_rejected(self) -> None:
        client = _client(_routes({"/v1/users/1": httpx.Response(200, json=[1, 2])}))
        with pytest.raises(FetchError, match="not an object"):
            client.get_user("1")

    def test_non_list_friends_rejected(self) -> None:
        body = {"items": "nope"}
        client = _client(_routes({"/v1/users/1/friends": httpx.Response(200, json=body)}))
        with pytest.raises(FetchError, match="not a list"):
            client.get_friends("1")
