"""Cache handler: write each successful result into a cache."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol


class Cache(Protocol):
    """Side-effect boundary for a key-value cache."""

    def set(self, key: str, value: Any) -> None: ...

    def get(self, key: str) -> Any | None: ...


def default_key(value: Any) -> str:
    """Use ``value.cache_key`` when present, otherwise ``value.id``."""
    for attr in ("cache_key", "id", "identity"):
        key = getattr(value, attr, None)
        if key is not None:
            return str(key)
    if isinstance(value, dict) and "id" in value:
        return str(value["id"])
    msg = f"Cannot derive a cache key from {type(value).__name__}"
    raise ValueError(msg)


class CacheUpdateHandler:
    """Store each value in *cache* under ``key_fn(value)``."""

    name = "cache"

    def __init__(self, cache: Cache, key_fn: Callable[[Any], str] = default_key) -> None:
        self._cache = cache
        self._key_fn = key_fn

    def __call__(self, value: Any) -> None:
        self._cache.set(self._key_fn(value), value)
