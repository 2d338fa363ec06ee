"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from valmeta.output.console import create_console, get_output, style_for_value

if TYPE_CHECKING:
    from rich.console import Console

    from valmeta.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
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
    if result.op == "translate":
        return str(result.data.get("message", ""))
    if result.op == "list_kinds":
        return "\n".join(item["kind"] for item in result.data.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="vm.ok")
    op = Text(f"  {result.op}", style="vm.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="vm.key")
    v = Text(str(value), style=style_for_value(value))
    console.print(k, v, end="")
    console.print()


def _descriptor_table(name: str, descriptors: dict[str, Any]) -> Table:
    """Build a Rich Table of one field's rule keys and values."""
    table = Table(
        title=Text(name, style="vm.field"),
        title_justify="left",
        show_header=True,
        pad_edge=False,
        expand=False,
    )
    table.add_column("Rule", style="vm.rule", no_wrap=True)
    table.add_column("Value")
    for key, value in descriptors.items():
        shown = "true" if value is True else str(value)
        table.add_row(key, Text(shown, style=style_for_value(value)))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="vm.error")
    op = Text(f"  {result.op}", style="vm.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_descriptors(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render build_descriptors: one table per field."""
    _status_line(console, result)
    fields: dict[str, dict[str, Any]] = result.data.get("fields", {})
    _field(console, "count", result.data.get("count", len(fields)))
    for name, descriptors in fields.items():
        console.print()
        if descriptors:
            console.print(_descriptor_table(name, descriptors))
        else:
            console.print(Text(name, style="vm.field"), Text("  (no rules)", style="dim"))


def _render_kinds(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_kinds as a table of kinds, aliases and emitted keys."""
    _status_line(console, result)
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Kind", style="vm.rule", no_wrap=True)
    table.add_column("Aliases")
    table.add_column("Keys", style="dim")
    for item in result.data.get("items", []):
        table.add_row(item["kind"], ", ".join(item["aliases"]), ", ".join(item["keys"]))
    console.print(table)


def _render_translate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single translated message."""
    _status_line(console, result)
    d = result.data
    if verbose:
        _field(console, "message_id", d.get("message_id", ""))
        _field(console, "domain", d.get("domain", ""))
    _field(console, "message", d.get("message", ""))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "build_descriptors": _render_descriptors,
    "list_kinds": _render_kinds,
    "translate": _render_translate,
}
