"""Rich Console factory and theme for gavel output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

GAVEL_THEME = Theme(
    {
        "gavel.ok": "bold green",
        "gavel.error": "bold red",
        "gavel.warning": "bold yellow",
        "gavel.op": "bold cyan",
        "gavel.key": "dim",
        "gavel.id": "bold blue",
        "gavel.name": "bold",
        "gavel.money": "magenta",
        "gavel.state.open": "green",
        "gavel.state.closed": "red",
        "gavel.token": "yellow",
    }
)

_STATE_STYLES: dict[str, str] = {
    "open": "gavel.state.open",
    "closed": "gavel.state.closed",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=GAVEL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_state(state: str) -> str:
    """Return the Rich style name for an auction state (``open``/``closed``)."""
    return _STATE_STYLES.get(state, "")
