"""Immutable records produced by the core."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UserInfo(BaseModel):
    """Aggregated user information produced by the user-info workflow.

    ``friends`` only ever holds ``UserInfo`` items produced by a
    workflow's conversion step, in the order the backend returned them.
    """

    model_config = {"frozen": True}

    identity: str
    name: str
    friends: tuple[UserInfo, ...] = Field(default_factory=tuple)


class LogEntry(BaseModel):
    """One imported log line."""

    model_config = {"frozen": True}

    line: int
    message: str
    timestamp: str | None = None
    level: str | None = None


class ImportedLog(BaseModel):
    """A log blob read from one source and parsed into entries."""

    model_config = {"frozen": True}

    source: str
    identifier: str
    entries: tuple[LogEntry, ...] = Field(default_factory=tuple)

    @property
    def cache_key(self) -> str:
        return f"{self.source}:{self.identifier}"

    def level_counts(self) -> dict[str, int]:
        """Entry count per level. Unparsed lines count under ``UNKNOWN``."""
        counts: dict[str, int] = {}
        for entry in self.entries:
            level = entry.level or "UNKNOWN"
            counts[level] = counts.get(level, 0) + 1
        return counts
