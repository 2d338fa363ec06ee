"""Rich Console factory and theme for valmeta output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

VALMETA_THEME = Theme(
    {
        "vm.ok": "bold green",
        "vm.error": "bold red",
        "vm.warning": "bold yellow",
        "vm.op": "bold cyan",
        "vm.key": "dim",
        "vm.field": "bold blue",
        "vm.rule": "cyan",
        "vm.message": "",
        "vm.bound": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=VALMETA_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_value(value: object) -> str:
    """Rich style for a descriptor value: numbers are bounds, text is messages."""
    if isinstance(value, bool):
        return "vm.ok"
    if isinstance(value, (int, float)):
        return "vm.bound"
    return "vm.message"
