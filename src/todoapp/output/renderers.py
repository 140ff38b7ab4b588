"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from todoapp.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from todoapp.services.result import ServiceResult


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
    """Render minimal output for ``--quiet`` mode.

    Checks print ``yes``/``no``, validations print the normalized value,
    listings print one key per line.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if "allowed" in data:
        return _yes_no(data["allowed"])
    if "granted" in data:
        return _yes_no(data["granted"])

    items = data.get("items")
    if items and isinstance(items, list):
        return "\n".join(_extract_key(item) for item in items if _extract_key(item))

    if "value" in data:
        return "" if data["value"] is None else str(data["value"])

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _yes_no(flag: Any) -> str:
    return "yes" if flag else "no"


def _extract_key(item: Any) -> str:
    """Extract the identifying key from a listing item."""
    if isinstance(item, dict):
        for key in ("from", "role"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="todo.ok")
    op = Text(f"  {result.op}", style="todo.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="todo.key")
    if isinstance(value, bool):
        v = Text(_yes_no(value), style="todo.allowed" if value else "todo.denied")
    elif key in ("from", "to"):
        v = Text(str(value), style=style_for_status(str(value)))
    elif key == "role":
        v = Text(str(value), style="todo.role")
    elif key == "value":
        v = Text(repr(value) if isinstance(value, str) else str(value), style="todo.value")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="todo.error")
    op = Text(f"  {result.op}", style="todo.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if err and err.code:
        console.print(Text(f"  code: {err.code}", style="dim"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Validation ────────────────────────────────────────────────────────


def _render_validation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render validate_* results: the normalized value and its shape."""
    _status_line(console, result)
    for key in ("kind", "value", "length", "has_value"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


# ── Transitions ───────────────────────────────────────────────────────


def _render_transition_check(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("from", "to", "allowed"):
        _field(console, key, d[key])
    if verbose:
        for key in ("rule", "approval", "emergency"):
            if key in d:
                _field(console, key, d[key])


def _render_transition_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("From", no_wrap=True)
    table.add_column("Allowed targets")
    if verbose:
        table.add_column("Label", style="dim")

    for item in items:
        source = str(item.get("from", ""))
        targets = item.get("to", [])
        cell = (
            Text(", ").join(Text(t, style=style_for_status(t)) for t in targets)
            if targets
            else Text("(terminal)", style="dim")
        )
        row: list[Any] = [Text(source, style=style_for_status(source)), cell]
        if verbose:
            row.append(str(item.get("label", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} statuses")


# ── Permissions ───────────────────────────────────────────────────────


def _render_permission_check(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("role", "permission", "granted"):
        _field(console, key, d[key])
    if verbose and d.get("description"):
        _field(console, "description", d["description"])


def _render_permission_listing(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=verbose, pad_edge=False, expand=False)
    table.add_column("Role", style="todo.role", no_wrap=True)
    table.add_column("Level", justify="right")
    table.add_column("Permissions")

    for item in items:
        perms = item.get("permissions", [])
        cell = "\n".join(perms) if verbose else f"{len(perms)} granted"
        table.add_row(str(item.get("role", "")), str(item.get("level", "")), cell)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} roles")


# ── Generic ───────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: indented key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    # Validation
    "validate_title": _render_validation,
    "validate_description": _render_validation,
    "validate_username": _render_validation,
    "validate_todo_id": _render_validation,
    "validate_user_id": _render_validation,
    # Transitions
    "check_transition": _render_transition_check,
    "list_transitions": _render_transition_table,
    # Permissions
    "check_permission": _render_permission_check,
    "list_permissions": _render_permission_listing,
}
