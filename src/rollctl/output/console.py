"""Rich Console factory and theme for rollctl output.

Consoles render into a StringIO buffer so renderers return plain strings.
In non-TTY environments (tests, pipes) Rich drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ROLL_THEME = Theme(
    {
        "roll.label": "bold",
        "roll.term": "bold cyan",
        "roll.negative": "bold magenta",
        "roll.value": "bold",
        "roll.dice": "dim",
        "roll.total": "bold green",
        "roll.error": "bold red",
        "roll.hint": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ROLL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_term(notation: str) -> str:
    """Return the Rich style for a term token; negative terms stand out."""
    return "roll.negative" if notation.startswith("-") else "roll.term"
