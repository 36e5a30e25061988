"""Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Successful
results get the roll report, failures the rejection reasons and help hint.

All user-supplied text goes through :class:`rich.text.Text` so square
brackets in an expression are never read as markup.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from rollctl.output.console import create_console, get_output, style_for_term

if TYPE_CHECKING:
    from rich.console import Console

    from rollctl.services.result import ServiceResult

HELP_HINT = "Use the -h flag for help"


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        _render_roll(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _label(text: str) -> Text:
    return Text(f"{text:<9}", style="roll.label")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the telemetry span tree (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=2)
        else:
            console.print(Text(f"  {key}: {value}"))


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    line = Text(" " * indent)
    line.append(f"{span.get('duration_ms', 0.0):>8.3f}ms", style="dim")
    line.append(f"  {span.get('name', '?')}")
    annotations = span.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 2)


# ── Roll report ───────────────────────────────────────────────────────


def _render_roll(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Restated expression, one line per throw, then constant subtotal and total."""
    d = result.data
    tokens = [*d.get("dice", []), *d.get("constants", [])]

    rolling = _label("Rolling:")
    for i, token in enumerate(tokens):
        if i:
            rolling.append(" ")
        rolling.append(token, style=style_for_term(token))
    console.print(rolling, soft_wrap=True)

    throws = d.get("throws", [])
    if not throws:
        console.print(_label("Throws:"), Text("none", style="dim"), sep="")
    else:
        console.print(Text("Throws:", style="roll.label"))
        table = Table.grid(padding=(0, 2))
        table.add_column(no_wrap=True)
        table.add_column(justify="right", style="roll.value")
        if verbose:
            table.add_column(style="roll.dice")
        for item in throws:
            term = item["term"]
            row = [Text(f"  {term}", style=style_for_term(term)), Text(f"-> {item['result']}")]
            if verbose:
                row.append(Text(_json.dumps(item.get("rolls", []))))
            table.add_row(*row)
        console.print(table)

    console.print(_label("Const:"), Text(str(d.get("const", 0)), style="roll.value"), sep="")
    console.print(_label("Sum:"), Text(str(d.get("sum", 0)), style="roll.total"), sep="")

    if verbose:
        _render_meta(console, result)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Print the rejection headline, every reason as a bullet, and the help hint."""
    err = result.error
    console.print(Text(f"{err.message if err else 'Unknown error'}:", style="roll.error"))
    reasons = err.detail.get("reasons", []) if err else []
    for reason in reasons:
        console.print(Text(f"- {reason.get('message', reason.get('code', ''))}"))
        if verbose and reason.get("column") is not None:
            where = f"  ({reason.get('code')} at column {reason['column'] + 1})"
            console.print(Text(where, style="dim"))
    console.print(Text(HELP_HINT, style="roll.hint"))
