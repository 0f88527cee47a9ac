"""Tests for database engine setup."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import inspect, text

from patchbay.infrastructure.database.engine import (
    BUSY_TIMEOUT_MS,
    MEMORY_DATABASE,
    init_database,
    is_memory_database,
)


class TestInitDatabase:
    def test_creates_file_and_parent(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "dir" / "patchbay.db"
        engine = init_database(db_path)
        try:
            assert db_path.exists()
            assert "records" in inspect(engine).get_table_names()
        finally:
            engine.dispose()

    def test_wal_mode(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "wal.db")
        try:
            with engine.connect() as conn:
                mode = conn.execute(text("PRAGMA journal_mode")).scalar()
            assert mode == "wal"
        finally:
            engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        db_path = tmp_path / "again.db"
        init_database(db_path).dispose()
        engine = init_database(db_path)
        try:
            indexes = {ix["name"] for ix in inspect(engine).get_indexes("records")}
            assert "ix_records_kind" in indexes
        finally:
            engine.dispose()

    def test_busy_timeout_applied(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "busy.db")
        try:
            with engine.connect() as conn:
                timeout = conn.execute(text("PRAGMA busy_timeout")).scalar()
            assert timeout == BUSY_TIMEOUT_MS
        finally:
            engine.dispose()


class TestMemoryDatabase:
    def test_tables_visible_across_connections(self) -> None:
        engine = init_database(MEMORY_DATABASE)
        try:
            with engine.begin() as conn:
                conn.execute(
                    text(
                        "INSERT INTO records (kind, payload, created) "
                        "VALUES ('note', '{}', '2026-01-01T00:00:00')"
                    )
                )
            with engine.connect() as conn:
                assert conn.execute(text("SELECT COUNT(*) FROM records")).scalar() == 1
        finally:
            engine.dispose()

    def test_no_file_created(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        init_database(MEMORY_DATABASE).dispose()
        assert list(tmp_path.iterdir()) == []

    def test_is_memory_database(self) -> None:
        assert is_memory_database(":memory:")
        assert is_memory_database(Path(":memory:"))
        assert not is_memory_database(Path("data/patchbay.db"))
