"""
Command dispatch.

Resolves the first positional argument to a registered command, hands it the
remaining arguments, runs it and finalizes the process. The reserved 'help'
pseudo-command renders usage and per-command help instead.

States:
    START -> MATCHED -> ARGS_PARSED -> RUNNING -> DONE
    START -> HELP
    START -> USAGE_ERROR
"""

from __future__ import annotations

import argparse
import sys
from enum import Enum
from typing import IO, TYPE_CHECKING, NoReturn

from .console import Console
from .constants import (
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    EXIT_USAGE,
    HELP_COMMAND,
)
from .context import RunContext
from .errors import ParseError, UnknownCommandError, UnknownHelpTopicError
from .help import HelpRenderer
from .log import LoggerFactory

if TYPE_CHECKING:
    from .command import CommandProtocol
    from .exit import ExitCoordinator
    from .log import Logger
    from .parser import GlobalParser
    from .registry import CommandRegistry


class DispatchState(Enum):
    START = "start"
    MATCHED = "matched"
    ARGS_PARSED = "args_parsed"
    RUNNING = "running"
    DONE = "done"
    HELP = "help"
    USAGE_ERROR = "usage_error"


class Dispatcher:
    """
    Routes one invocation to a command.

    Output streams default to sys.stdout/sys.stderr looked up at write time.
    """

    def __init__(
        self,
        name: str,
        description: str,
        registry: CommandRegistry,
        exit: ExitCoordinator,
        lg: Logger,
        global_parser: GlobalParser | None = None,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ) -> None:
        self.name = name
        self.description = description
        self.registry = registry
        self.exit = exit
        self.lg = lg
        self.global_parser = global_parser
        self._stdout = stdout
        self._stderr = stderr
        self.state = DispatchState.START
        self.command: CommandProtocol | None = None

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> IO[str]:
        return self._stderr if self._stderr is not None else sys.stderr

    @property
    def renderer(self) -> HelpRenderer:
        return HelpRenderer(self.name, self.description, self.registry)

    def _transition(self, state: DispatchState) -> None:
        self.lg.debug(
            "dispatch state", extra={"from": self.state.value, "to": state.value}
        )
        self.state = state

    def usage(self) -> NoReturn:
        """Print top-level usage to stderr and exit with status 2."""
        self._transition(DispatchState.USAGE_ERROR)
        Console(self.stderr).write(self.renderer.render_usage())
        raise SystemExit(EXIT_USAGE)

    def parse_global(
        self, argv: list[str]
    ) -> tuple[argparse.Namespace, list[str]]:
        """
        Parse flags preceding the subcommand token.

        Returns:
            Tuple of (global flag namespace, positional arguments)
        """
        if self.global_parser is None:
            return argparse.Namespace(), list(argv)

        try:
            options, rest = self.global_parser.parse_flags(argv)
        except ParseError as e:
            Console(self.stderr).error(f"{e}\n")
            self.usage()

        if getattr(options, "help", False):
            out = self.stdout
            Console(out).write(self.renderer.render_usage())
            self.global_parser.print_options(out)
            raise SystemExit(EXIT_SUCCESS)
        return options, rest

    def main(self, argv: list[str]) -> int:
        """Parse global flags, then dispatch."""
        options, args = self.parse_global(argv)
        return self.dispatch(args, options)

    def dispatch(
        self, args: list[str], options: argparse.Namespace | None = None
    ) -> int:
        """
        Dispatch positional arguments to a command.

        Returns only for 'help'; every other path raises SystemExit.

        Args:
            args: Positional arguments; the first names the command
            options: Parsed global flags, passed on to the run context

        Returns:
            int: EXIT_SUCCESS after help output
        """
        self.registry.freeze()
        if not args:
            self.usage()

        if args[0] == HELP_COMMAND:
            self._transition(DispatchState.HELP)
            self.help(args[1:])
            return EXIT_SUCCESS

        try:
            cmd = self.registry.find(args[0])
        except UnknownCommandError:
            self._unknown_command(args[0])

        self.command = cmd
        self._transition(DispatchState.MATCHED)
        rest = cmd.parse_args(args[1:], self.stderr)
        self._transition(DispatchState.ARGS_PARSED)

        self._run(cmd, rest, options or argparse.Namespace())

    def _unknown_command(self, token: str) -> NoReturn:
        Console(self.stderr).error(
            f'{self.name}: unknown subcommand "{token}"\n'
            f"Run '{self.name} {HELP_COMMAND}' for usage.\n"
        )
        self._transition(DispatchState.USAGE_ERROR)
        self.exit.exit(EXIT_USAGE)

    def _run(
        self, cmd: CommandProtocol, args: list[str], options: argparse.Namespace
    ) -> NoReturn:
        ctx = RunContext(
            app_name=self.name,
            stdout=self.stdout,
            stderr=self.stderr,
            lg=LoggerFactory.derive(self.lg, cmd.name),
            exit=self.exit,
            options=options,
        )

        self._transition(DispatchState.RUNNING)
        try:
            result = cmd.run(ctx, args)
        except KeyboardInterrupt:
            self.lg.debug("interrupted", extra={"command": cmd.name})
            self.exit.set_exit_status(EXIT_INTERRUPTED)
        except Exception as e:
            Console(self.stderr).error(f"{self.name} {cmd.name}: {e}\n")
            self.lg.debug("command failed", extra={"command": cmd.name}, exc_info=e)
            self.exit.set_exit_status(EXIT_FAILURE)
        else:
            if isinstance(result, int) and not isinstance(result, bool):
                self.exit.set_exit_status(result)

        self._transition(DispatchState.DONE)
        self.exit.finalize()

    def help(self, args: list[str]) -> None:
        """
        Implement 'help [topic]'.

        No topic prints top-level usage to stdout. One topic prints its help,
        which works for documentation-only topics too. Anything else is a
        usage error.
        """
        if not args:
            Console(self.stdout).write(self.renderer.render_usage())
            return

        if len(args) != 1:
            Console(self.stderr).error(
                f"usage: {self.name} {HELP_COMMAND} command\n\n"
                "Too many arguments given.\n"
            )
            raise SystemExit(EXIT_USAGE)

        try:
            cmd = self.registry.lookup_topic(args[0])
        except UnknownHelpTopicError:
            Console(self.stderr).error(
                f"Unknown help topic '{args[0]}'. Run '{self.name} {HELP_COMMAND}'.\n"
            )
            raise SystemExit(EXIT_USAGE) from None

        Console(self.stdout).write(self.renderer.render_command_help(cmd))
