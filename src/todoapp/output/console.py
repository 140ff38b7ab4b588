"""Rich Console factory and theme for todoctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Rich drops color codes when it detects no terminal
(tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TODO_THEME = Theme(
    {
        "todo.ok": "bold green",
        "todo.error": "bold red",
        "todo.warning": "bold yellow",
        "todo.op": "bold cyan",
        "todo.key": "dim",
        "todo.value": "bold",
        "todo.allowed": "green",
        "todo.denied": "red",
        "todo.status.todo": "blue",
        "todo.status.in_progress": "yellow",
        "todo.status.completed": "green",
        "todo.status.deleted": "dim",
        "todo.role": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (stable output in tests).
    """
    return Console(
        file=StringIO(),
        theme=TODO_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(code: str) -> str:
    """Return the Rich style name for a status code such as ``"IN_PROGRESS"``."""
    style = f"todo.status.{code.lower()}"
    return style if style in TODO_THEME.styles else ""
