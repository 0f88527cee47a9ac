"""Tests for ProfileService."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from patchbay.domain.types import Network
from patchbay.infrastructure.hub import Hub
from patchbay.services.profiles import ProfileService
from patchbay.workflow.clients import JsonApiSocialClient
from patchbay.workflow.networks import build_steps

USERS = {
    "/api/users/1": {"id": 1, "first_name": "Pavel", "last_name": "Durov"},
    "/api/users/1/friends": {
        "items": [
            {"id": 2, "first_name": "Anna", "last_name": "K"},
            {"id": 3, "first_name": "Boris", "last_name": "L"},
        ]
    },
}


def _respond(request: httpx.Request) -> httpx.Response:
    body = USERS.get(request.url.path)
    if body is None:
        return httpx.Response(404)
    return httpx.Response(200, json=body)


@pytest.fixture
def vk_hub(hub: Hub) -> Hub:
    client = httpx.Client(transport=httpx.MockTransport(_respond), base_url="https://vk.test/api")
    hub.networks.register(Network.VK, build_steps(Network.VK, JsonApiSocialClient(client)))
    return hub


class TestCollect:
    def test_collect_profile(self, vk_hub: Hub) -> None:
        result = ProfileService(vk_hub).collect("vk", "https://vk.com/id1")
        assert result.ok, result.error
        assert result.data["id"] == "1"
        assert result.data["name"] == "Pavel Durov"
        assert result.data["count"] == 2
        assert result.data["items"] == [
            {"id": "2", "name": "Anna K"},
            {"id": "3", "name": "Boris L"},
        ]

    def test_backend_404_names_failing_step(self, vk_hub: Hub) -> None:
        result = ProfileService(vk_hub).collect("vk", "https://vk.com/id9")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CORE_FAILED"
        assert result.error.detail["cause_code"] == "STEP_FAILED"

    def test_unconfigured_network(self, hub: Hub) -> None:
        result = ProfileService(hub).collect("twitter", "https://x.com/jack")
        assert not result.ok
        assert result.error is not None
        assert result.error.detail["cause_code"] == "UNKNOWN_KEY"

    def test_network_from_config(self, make_settings: Callable[..., Any]) -> None:
        hub = Hub(make_settings(networks={"vk": {"api_base": "https://vk.test/api"}}))
        try:
            assert Network.VK in hub.networks
        finally:
            hub.close()
