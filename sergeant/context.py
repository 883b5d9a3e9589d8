"""
Per-run context handed to command bodies.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import IO, TYPE_CHECKING, Any, NoReturn

from .console import Console
from .constants import EXIT_FAILURE

if TYPE_CHECKING:
    from .exit import ExitCoordinator
    from .log import Logger


@dataclass
class RunContext:
    """
    Everything a command needs from the surrounding application.

    Attributes:
        app_name: Application name, used to prefix error messages
        stdout: Output stream
        stderr: Error stream
        lg: Logger for the running command
        exit: Exit coordinator for status reporting and shutdown callbacks
        options: Parsed global flags
    """

    app_name: str
    stdout: IO[str]
    stderr: IO[str]
    lg: Logger
    exit: ExitCoordinator
    options: argparse.Namespace = field(default_factory=argparse.Namespace)

    def set_exit_status(self, n: int) -> None:
        """Raise the final exit status to at least n without exiting."""
        self.exit.set_exit_status(n)

    def atexit(self, callback: Callable[[], object]) -> None:
        """Register a callback to run when the application finalizes."""
        self.exit.atexit(callback)

    def errorf(self, fmt: str, *args: Any) -> None:
        """Print "{app}: message" to stderr and mark the run as failed."""
        message = fmt % args if args else fmt
        Console(self.stderr).error(f"{self.app_name}: {message}\n")
        self.set_exit_status(EXIT_FAILURE)

    def fatalf(self, fmt: str, *args: Any) -> NoReturn:
        """errorf(), then finalize immediately."""
        self.errorf(fmt, *args)
        self.exit.finalize()
