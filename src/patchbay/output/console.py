"""Rich Console factory and theme for patchbay output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PB_THEME = Theme(
    {
        "pb.ok": "bold green",
        "pb.error": "bold red",
        "pb.warning": "bold yellow",
        "pb.op": "bold cyan",
        "pb.key": "dim",
        "pb.id": "bold blue",
        "pb.name": "bold",
        "pb.level.debug": "dim",
        "pb.level.info": "green",
        "pb.level.warning": "yellow",
        "pb.level.error": "red",
        "pb.level.critical": "bold red",
    }
)


def style_for_level(level: str | None) -> str:
    """Return the theme style for a log level (empty for unknown)."""
    if not level:
        return ""
    key = "critical" if level in ("CRITICAL", "FATAL") else level.lower()
    return f"pb.level.{key}" if f"pb.level.{key}" in PB_THEME.styles else ""


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PB_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
