"""JSON API client for social backends.

Expects a REST shape of ``GET {base}/users/{id}`` returning a user object
and ``GET {base}/users/{id}/friends`` returning either a list or an
object with an ``items`` list. Every failure surfaces as
:class:`FetchError`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from patchbay.domain.errors import FetchError

logger = logging.getLogger(__name__)


class JsonApiSocialClient:
    """:class:`~patchbay.workflow.networks.SocialClient` over ``httpx``."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def get_user(self, user_id: str) -> Mapping[str, Any]:
        body = self._get_json(f"users/{user_id}")
        if not isinstance(body, Mapping):
            msg = f"User payload for {user_id} is not an object"
            raise FetchError(msg)
        return body

    def get_friends(self, user_id: str) -> Sequence[Mapping[str, Any]]:
        body = self._get_json(f"users/{user_id}/friends")
        items = body.get("items") if isinstance(body, Mapping) else body
        if not isinstance(items, list):
            msg = f"Friends payload for {user_id} is not a list"
            raise FetchError(msg)
        return items

    def close(self) -> None:
        self._client.close()

    def _get_json(self, path: str) -> Any:
        try:
            response = self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            msg = f"GET {path} returned HTTP {exc.response.status_code}"
            raise FetchError(msg) from exc
        except httpx.HTTPError as exc:
            msg = f"GET {path} failed: {exc}"
            raise FetchError(msg) from exc
        logger.debug("GET %s -> %s", path, response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            msg = f"GET {path} returned invalid JSON"
            raise FetchError(msg) from exc
