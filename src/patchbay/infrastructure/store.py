"""RecordStore — the sealed persistence core of the record saver.

``save`` is the core operation that notification pipelines wrap. It knows
nothing about handlers; side effects are attached from the outside.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select

from patchbay.infrastructure.database.schema import records

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


@dataclass(frozen=True)
class StoredRecord:
    """A persisted record."""

    id: int
    kind: str
    payload: dict[str, Any]
    created: str

    @property
    def cache_key(self) -> str:
        return f"{self.kind}:{self.id}"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "kind": self.kind, "payload": self.payload, "created": self.created}


class RecordStore:
    """Persist JSON records in the ``records`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save(self, kind: str, payload: dict[str, Any]) -> StoredRecord:
        """Insert a record and return it. Commits before returning."""
        if not kind or not kind.strip():
            msg = "Record kind must be a non-empty string"
            raise ValueError(msg)
        if not isinstance(payload, dict):
            msg = f"Record payload must be an object, got {type(payload).__name__}"
            raise TypeError(msg)
        created = datetime.now(UTC).isoformat()
        encoded = json.dumps(payload, sort_keys=True)
        with self._engine.begin() as conn:
            result = conn.execute(
                insert(records).values(kind=kind, payload=encoded, created=created)
            )
            assert result.inserted_primary_key is not None
            record_id = result.inserted_primary_key[0]
        return StoredRecord(id=record_id, kind=kind, payload=payload, created=created)

    def get(self, record_id: int) -> StoredRecord | None:
        with self._engine.connect() as conn:
            row = conn.execute(select(records).where(records.c.id == record_id)).first()
        return _to_record(row) if row is not None else None

    def list_kind(self, kind: str) -> list[StoredRecord]:
        """All records of *kind*, oldest first."""
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(records).where(records.c.kind == kind).order_by(records.c.id)
            ).fetchall()
        return [_to_record(row) for row in rows]


def _to_record(row: Any) -> StoredRecord:
    return StoredRecord(
        id=row.id,
        kind=row.kind,
        payload=json.loads(row.payload),
        created=row.created,
    )
