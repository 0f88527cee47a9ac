"""SQLite engine for the record store.

SQLAlchemy Core only: the store issues a handful of statements per
command and needs no session or identity map.

Pipelines may run the record saver from several threads at once, so every
connection waits up to ``BUSY_TIMEOUT_MS`` for a lock instead of failing
with ``database is locked``. File databases use WAL so audit reads never
block a save. ``[store] path = ":memory:"`` gives a throwaway database
shared by all connections of one engine.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from patchbay.infrastructure.database.schema import metadata

MEMORY_DATABASE = ":memory:"
BUSY_TIMEOUT_MS = 5000


def is_memory_database(db_path: Path | str) -> bool:
    return str(db_path) == MEMORY_DATABASE


def create_db_engine(db_path: Path | str) -> Engine:
    """Create an engine for *db_path* with the store's connection pragmas."""
    pragmas = [f"busy_timeout={BUSY_TIMEOUT_MS}"]
    if is_memory_database(db_path):
        # One shared connection, otherwise each connection sees its own empty database
        engine = create_engine(
            "sqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(f"sqlite:///{db_path}")
        pragmas.append("journal_mode=WAL")

    @event.listens_for(engine, "connect")
    def _apply_pragmas(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        for pragma in pragmas:
            cursor.execute(f"PRAGMA {pragma}")
        cursor.close()

    return engine


def init_database(db_path: Path | str) -> Engine:
    """Open (creating if needed) the record database and its tables.

    Safe to call on an existing database.
    """
    if not is_memory_database(db_path):
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    return engine
