"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from agecalc.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from agecalc.services.result import ServiceResult

_COMPONENTS = ("years", "months", "days", "hours", "minutes", "seconds")


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    show_totals: bool = True,
    show_references: bool = True,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(
            result,
            console,
            show_totals=show_totals,
            show_references=show_references,
        )
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if result.op in ("difference", "age"):
        return f"{data.get('ymd', '')} {data.get('hms', '')}".strip()
    if result.op == "adjust":
        return str(data.get("value", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="age.ok")
    op = Text(f"  {result.op}", style="age.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    k = Text(f"  {key}: ", style="age.key")
    console.print(k, Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, telemetry span included."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v)
        else:
            console.print(f"    {k}: {v}")


def _render_span(console: Console, span_data: dict[str, Any]) -> None:
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"

    line = f"    [{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)


# ── Op renderers ──────────────────────────────────────────────────────


def _breakdown_table(data: dict[str, Any]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for name in _COMPONENTS:
        table.add_column(name.title(), justify="right")
    table.add_row(*(str(data.get(name, "")) for name in _COMPONENTS))
    return table


def _render_difference(
    result: ServiceResult,
    console: Console,
    *,
    show_totals: bool = True,
    show_references: bool = True,
) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "start", data.get("start", ""), style="age.instant")
    _field(console, "end", data.get("end", ""), style="age.instant")
    _field(console, "age", data.get("ymd", ""), style="age.value")
    _field(console, "time", f"{data.get('hms', '')} (hh:mm:ss)", style="age.value")
    console.print(_breakdown_table(data))

    if show_totals:
        _field(console, "total", data.get("totals", ""), style="age.total")
    if show_references and data.get("references"):
        _field(console, "references", data["references"])
    if data.get("birthday"):
        _field(console, "birthday", data["birthday"])


def _render_adjust(
    result: ServiceResult,
    console: Console,
    **_: Any,
) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "value", data.get("value", ""), style="age.instant")

    steps = data.get("steps") or []
    if len(steps) > 1:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Delta")
        table.add_column("Units")
        table.add_column("Value", style="age.instant")
        for step in steps:
            table.add_row(
                str(step.get("delta", "")),
                ", ".join(step.get("units", [])) or "-",
                str(step.get("value", "")),
            )
        console.print(table)


def _render_generic(result: ServiceResult, console: Console, **_: Any) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="age.error")
    op = Text(f"  {result.op}", style="age.op")
    console.print(label, op, Text(" — "), Text(msg))
    if verbose and err and err.detail:
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


_OP_RENDERERS: dict[str, Any] = {
    "difference": _render_difference,
    "age": _render_difference,
    "adjust": _render_adjust,
}
