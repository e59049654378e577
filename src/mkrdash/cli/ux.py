"""
CLI output helpers built on rich.

Status messages go to stderr so that stdout carries only command output
(markdown, JSON) and can be piped.

Environment handling:
- Respects NO_COLOR and FORCE_COLOR environment variables
- Falls back to plain text when stderr is not a terminal
"""

from __future__ import annotations

import os

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

MKRDASH_THEME = Theme(
    {
        "info": "#88C0D0",
        "success": "#A3BE8C",
        "error": "#BF616A bold",
    }
)

console = Console(
    theme=MKRDASH_THEME,
    stderr=True,
    force_terminal=os.environ.get("FORCE_COLOR") is not None,
    no_color=os.environ.get("NO_COLOR") is not None,
)


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]✓ {escape(message)}[/success]", highlight=False, soft_wrap=True)


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[error]✗ {escape(message)}[/error]", highlight=False, soft_wrap=True)


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]ℹ {escape(message)}[/info]", highlight=False, soft_wrap=True)
