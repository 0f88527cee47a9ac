"""Locating and parsing ``patchbay.toml``.

Lookup order for the file in effect:

1. ``--config PATH``; a path that is not a file means "no config file"
2. the ``PATCHBAY_CONFIG`` env var, with the same rule
3. the nearest ``patchbay.toml`` in the start directory or any ancestor

Parsing failures surface as :class:`ConfigurationError` naming the file,
so callers never see a bare ``TOMLDecodeError``.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from patchbay.config.models import PatchbayConfig
from patchbay.domain.errors import ConfigurationError

CONFIG_FILENAME = "patchbay.toml"
CONFIG_ENV_VAR = "PATCHBAY_CONFIG"


def _existing_file(path: str | Path) -> Path | None:
    candidate = Path(path)
    return candidate if candidate.is_file() else None


def _ancestors(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config named by ``PATCHBAY_CONFIG``, else the nearest walk-up match."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _existing_file(env_path)
    for directory in _ancestors(start or Path.cwd()):
        found = _existing_file(directory / CONFIG_FILENAME)
        if found is not None:
            return found
    return None


def locate_config(explicit: str | Path | None = None, start: Path | None = None) -> Path | None:
    """Resolve the config file for a CLI invocation (``--config`` first)."""
    if explicit:
        return _existing_file(explicit)
    return find_config(start)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        ConfigurationError: If the file is not valid TOML.
    """
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigurationError(msg) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> PatchbayConfig:
    """Load and validate the section models from *path* (or the discovered file).

    Missing files give the code defaults.
    """
    resolved = path or find_config(cwd)
    if resolved is None:
        return PatchbayConfig()
    return PatchbayConfig.model_validate(read_toml(resolved))
