"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from patchbay.output.console import create_console, get_output, style_for_level

if TYPE_CHECKING:
    from rich.console import Console

    from patchbay.services.result import ServiceResult

_TEXT_PREVIEW_LIMIT = 2000


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    # For list results, return IDs only
    items = result.data.get("items")
    if items and isinstance(items, list):
        ids = [str(item["id"]) for item in items if isinstance(item, dict) and "id" in item]
        if ids:
            return "\n".join(ids)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="pb.ok"), Text(f"  {result.op}", style="pb.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}:", style="pb.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="pb.id")
    elif key == "name":
        v = Text(str(value), style="pb.name")
    else:
        v = Text(str(value))
    console.print(k, v)


def _render_meta(console: Console, result: ServiceResult, *, verbose: bool) -> None:
    if not verbose or not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        console.print(f"    {key}: {value}", markup=False)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pb.error")
    op = Text(f"  {result.op}", style="pb.op")
    code = Text(f" [{err.code}]", style="pb.key") if err else Text("")
    console.print(label, op, code, Text(" — "), msg, markup=False)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}", markup=False)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    _render_meta(console, result, verbose=verbose)


def _render_read(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    for key in ("source", "identifier", "size", "sha256"):
        _field(console, key, data[key])
    text = data.get("text")
    if text is None:
        console.print(Text("  (binary content)", style="dim"))
    elif text:
        console.print()
        console.print(text[:_TEXT_PREVIEW_LIMIT], markup=False)
        if len(text) > _TEXT_PREVIEW_LIMIT:
            console.print(Text(f"  … {len(text) - _TEXT_PREVIEW_LIMIT} more chars", style="dim"))


def _render_import(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "source", f"{data['source']}:{data['identifier']}")
    _field(console, "count", data["count"])
    levels = ", ".join(f"{level}={n}" for level, n in sorted(data["levels"].items()))
    if levels:
        _field(console, "levels", levels)

    if data["items"]:
        table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Timestamp")
        table.add_column("Level")
        table.add_column("Message")
        for item in data["items"]:
            level = item.get("level") or ""
            table.add_row(
                str(item["line"]),
                item.get("timestamp") or "",
                Text(level, style=style_for_level(level)),
                item["message"],
            )
        console.print(table)
    _render_meta(console, result, verbose=verbose)


def _render_profile(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "network", data["network"])
    _field(console, "id", data["id"])
    _field(console, "name", data["name"])
    _field(console, "friends", data["count"])

    if data["items"]:
        table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
        table.add_column("ID", style="pb.id")
        table.add_column("Name")
        for item in data["items"]:
            table.add_row(item["id"], item["name"])
        console.print(table)
    _render_meta(console, result, verbose=verbose)


def _render_pipelines(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "strategy", data["strategy"])
    _field(console, "pass_value", data["pass_value"])
    _field(console, "handlers", ", ".join(data["handlers"]) or "(none)")
    _field(console, "available", ", ".join(data["available"]))
    for pipeline in data["pipelines"]:
        _field(console, pipeline["operation"], ", ".join(pipeline["handlers"]) or "(none)")


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "read": _render_read,
    "import_log": _render_import,
    "collect_profile": _render_profile,
    "describe_pipelines": _render_pipelines,
}
