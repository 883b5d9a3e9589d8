"""
Console output for usage, help and error text.

Wraps a rich console bound to one stream. Text is always written verbatim:
markup, highlighting and emoji substitution are disabled and lines are never
wrapped, so help text like "[arguments]" or ":name:" survives unchanged.
Error messages are styled only when the stream is an interactive terminal.
"""

from __future__ import annotations

import os
import sys
from typing import IO

from rich.console import Console as RichConsole
from rich.theme import Theme

SERGEANT_THEME = {
    "error": "red bold",
    "muted": "dim",
}


def _is_terminal(stream: IO[str]) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:  # closed stream
        return False


def _should_use_color(stream: IO[str]) -> bool:
    """Determine if color output should be used for the given stream."""
    # Respect NO_COLOR environment variable (https://no-color.org/)
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return _is_terminal(stream)


class Console:
    """
    Plain-text writer with optional styling on terminals.

    Example:
        console = Console(sys.stderr)
        console.write("usage: hello\\n")
        console.error("hello: unknown subcommand 'x'\\n")
    """

    def __init__(self, file: IO[str] | None = None, *, no_color: bool | None = None):
        """
        Initialize the console.

        Args:
            file: Output stream (default: sys.stdout)
            no_color: Disable styling (True/False) or auto-detect (None)
        """
        self._file = file if file is not None else sys.stdout
        if no_color is None:
            no_color = not _should_use_color(self._file)
        self._no_color = no_color
        self._rich = RichConsole(
            file=self._file,
            theme=Theme(SERGEANT_THEME),
            no_color=no_color,
            force_terminal=False if no_color else None,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    @property
    def file(self) -> IO[str]:
        return self._file

    @property
    def no_color(self) -> bool:
        return self._no_color

    def write(self, text: str, style: str | None = None) -> None:
        """Write text exactly as given (no trailing newline is added)."""
        if not text:
            return
        if style is None or self._no_color:
            # Unstyled output bypasses rendering entirely
            self._file.write(text)
        else:
            self._rich.print(text, style=style, end="")
        self.flush()

    def error(self, text: str) -> None:
        """Write an error message, styled on terminals."""
        self.write(text, style="error")

    def flush(self) -> None:
        flush = getattr(self._file, "flush", None)
        if flush is not None:
            flush()
