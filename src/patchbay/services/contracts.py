"""Typed payload contracts for service boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions fail fast in tests.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


class ReadResultData(BaseModel):
    """Payload contract for ``ReadService.read``."""

    source: str
    identifier: str
    size: int
    sha256: str
    text: str | None = None


class LogEntryItem(BaseModel):
    """One imported log line."""

    line: int
    timestamp: str | None = None
    level: str | None = None
    message: str


class ImportLogResultData(BaseModel):
    """Payload contract for ``ImportService.import_log``."""

    source: str
    identifier: str
    count: int
    levels: dict[str, int]
    items: list[LogEntryItem]


class FriendItem(BaseModel):
    """One converted related record."""

    id: str
    name: str


class ProfileResultData(BaseModel):
    """Payload contract for ``ProfileService.collect``."""

    network: str
    id: str
    name: str
    count: int
    items: list[FriendItem]


class RecordData(BaseModel):
    """Payload contract for ``RecordService.save`` and ``RecordService.get``."""

    id: int
    kind: str
    payload: dict[str, Any]
    created: str


class PipelineDescription(BaseModel):
    """One configured pipeline."""

    operation: str
    handlers: list[str]


class PipelineListData(BaseModel):
    """Payload contract for ``PipelineService.describe``."""

    strategy: str
    pass_value: str
    handlers: list[str]
    available: list[str] = Field(default_factory=list)
    pipelines: list[PipelineDescription] = Field(default_factory=list)
