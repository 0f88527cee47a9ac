"""Log line parsing for the log importer.

Lines look like ``<timestamp> <LEVEL> <message>``. Lines that do not
match keep their raw text as the message with no timestamp or level.
Blank lines are skipped but still count toward line numbers.
"""

from __future__ import annotations

import re

from patchbay.domain.errors import AdapterError
from patchbay.domain.records import LogEntry
from patchbay.domain.types import AdapterErrorKind

LOG_LINE_PATTERN = re.compile(
    r"^(?P<timestamp>\d{4}-\d{2}-\d{2}[T ][\d:.]+(?:Z|[+-]\d{2}:?\d{2})?)\s+"
    r"(?P<level>DEBUG|INFO|WARN|WARNING|ERROR|CRITICAL|FATAL)\s+"
    r"(?P<message>.*)$"
)


def decode_log(data: bytes, *, identifier: str | None = None) -> str:
    """Decode raw log bytes as UTF-8 (BOM tolerated)."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        msg = f"Log data is not valid UTF-8: {exc.reason} at byte {exc.start}"
        raise AdapterError(AdapterErrorKind.MALFORMED, msg, identifier=identifier) from exc


def parse_line(line_no: int, line: str) -> LogEntry:
    """Parse a single non-blank log line."""
    match = LOG_LINE_PATTERN.match(line)
    if match is None:
        return LogEntry(line=line_no, message=line)
    level = match["level"]
    if level == "WARN":
        level = "WARNING"
    return LogEntry(
        line=line_no,
        timestamp=match["timestamp"],
        level=level,
        message=match["message"],
    )


def parse_log(data: bytes, *, identifier: str | None = None) -> list[LogEntry]:
    """Parse raw log bytes into entries, preserving line order.

    Examples:
        >>> [e.level for e in parse_log(b"2024-01-01T00:00:00 INFO up\\nnoise\\n")]
        ['INFO', None]
    """
    text = decode_log(data, identifier=identifier)
    return [
        parse_line(line_no, raw.rstrip())
        for line_no, raw in enumerate(text.splitlines(), start=1)
        if raw.strip()
    ]
