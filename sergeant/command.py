"""
Command descriptors.

A command is one subcommand of an application, like 'git status'. It bundles
the metadata used for help output with the code that runs it and the flags
it accepts.

Commands can be declared by instantiating Command with a run callable:

    def run_hello(cmd, ctx, args):
        ctx.stdout.write("Hello world!\\n")

    hello = Command("hello", "say hello to the world", run=run_hello)

or by subclassing and overriding run():

    class Hello(Command):
        usage_line = "hello [-n name]"
        short = "say hello"

        def add_args(self, parser):
            parser.add_argument("-n", "--name", default="world")

        def run(self, ctx, args):
            ctx.stdout.write(f"Hello {self.options.name}!\\n")

A command with neither is a documentation-only topic: it shows up under
'help <topic>' but cannot be run.
"""

from __future__ import annotations

import argparse
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import IO, TYPE_CHECKING, Any, NoReturn

from .constants import EXIT_USAGE
from .errors import CommandError, ParseError
from .help import trim
from .parser import CommandParser

if TYPE_CHECKING:
    from .context import RunContext

RunFunc = Callable[["Command", "RunContext", list[str]], "int | None"]
AddArgsFunc = Callable[[argparse.ArgumentParser], None]


class CommandProtocol(ABC):
    """
    Interface every invocable command implements.

    The dispatcher and help renderer only rely on these members, so commands
    need not derive from Command as long as they provide them.
    """

    usage_line: str
    short: str
    long: str
    custom_flags: bool

    @property
    @abstractmethod
    def name(self) -> str:
        """Canonical command name."""

    @property
    @abstractmethod
    def runnable(self) -> bool:
        """Whether the command can be run, as opposed to a documentation topic."""

    @abstractmethod
    def parse_args(self, args: list[str], stderr: IO[str] | None = None) -> list[str]:
        """Consume the command's flags and return the positional remainder."""

    @abstractmethod
    def run(self, ctx: RunContext, args: list[str]) -> int | None:
        """Run the command with the positional arguments after its flags."""

    @abstractmethod
    def usage(self, stderr: IO[str] | None = None) -> NoReturn:
        """Print usage and terminate with the usage exit code."""


class Command(CommandProtocol):
    """Descriptor for one subcommand."""

    # The one-line usage message. The first word is the command name.
    usage_line: str = ""
    # Short description shown in the 'help' listing.
    short: str = ""
    # Long description shown in 'help <command>' output.
    long: str = ""
    # The command does its own flag parsing; arguments are passed verbatim.
    custom_flags: bool = False

    def __init__(
        self,
        usage_line: str | None = None,
        short: str | None = None,
        long: str | None = None,
        *,
        run: RunFunc | None = None,
        add_args: AddArgsFunc | None = None,
        custom_flags: bool | None = None,
    ) -> None:
        """
        Initialize the command.

        Arguments left as None keep the class-level value, so subclasses can
        declare their metadata as class attributes.

        Args:
            usage_line: One-line usage; the first word is the command name
            short: Short description for the command listing
            long: Long description for per-command help
            run: Callable invoked as run(cmd, ctx, args)
            add_args: Callable registering flags on the command's parser
            custom_flags: Pass arguments through without flag parsing
        """
        if usage_line is not None:
            self.usage_line = usage_line
        if short is not None:
            self.short = short
        if long is not None:
            self.long = long
        if custom_flags is not None:
            self.custom_flags = custom_flags
        self._run_func = run
        self._add_args_func = add_args
        self._flags: CommandParser | None = None
        self.options = argparse.Namespace()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.usage_line!r})"

    @property
    def name(self) -> str:
        """The first word of the usage line, or the whole line if it has one word."""
        name, _, _ = self.usage_line.partition(" ")
        return name

    @property
    def runnable(self) -> bool:
        return self._run_func is not None or type(self).run is not Command.run

    @property
    def flags(self) -> CommandParser:
        """The command's flag parser, created on first access."""
        if self._flags is None:
            self._flags = CommandParser(prog=self.name)
            self.add_args(self._flags)
        return self._flags

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        """Register command-specific flags. Override in subclasses."""
        if self._add_args_func is not None:
            self._add_args_func(parser)

    def parse_args(self, args: list[str], stderr: IO[str] | None = None) -> list[str]:
        """
        Consume the command's flags and return the positional remainder.

        Custom-flag commands get their arguments back unmodified. Parsed flag
        values are stored on self.options.

        Args:
            args: Tokens following the command name
            stderr: Stream for error and usage output (default: sys.stderr)

        Returns:
            list[str]: Positional arguments left after the flags
        """
        if self.custom_flags:
            self.options = argparse.Namespace()
            return list(args)

        try:
            self.options, rest = self.flags.parse_flags(args)
        except ParseError as e:
            out = stderr if stderr is not None else sys.stderr
            out.write(f"{e}\n")
            self.usage(out)

        if getattr(self.options, "help", False):
            self.usage(stderr)
        return rest

    def run(self, ctx: RunContext, args: list[str]) -> int | None:
        """
        Run the command.

        Args:
            ctx: Run context for output streams, logging and exit status
            args: Positional arguments after the command's flags

        Returns:
            Optional exit status to report

        Raises:
            CommandError: If the command is a documentation-only topic
        """
        if self._run_func is None:
            raise CommandError(
                f"'{self.name}' is a help topic and cannot be run", command=self.name
            )
        return self._run_func(self, ctx, args)

    def usage(self, stderr: IO[str] | None = None) -> NoReturn:
        """
        Print the usage line and long description, then exit with status 2.

        Shutdown callbacks are not run.
        """
        out = stderr if stderr is not None else sys.stderr
        out.write(f"usage: {self.usage_line}\n\n")
        out.write(f"{trim(self.long)}\n")
        out.flush()
        raise SystemExit(EXIT_USAGE)


def command(
    usage_line: str, short: str = "", long: str = "", **kwargs: Any
) -> Callable[[RunFunc], Command]:
    """
    Decorator turning a run function into a Command.

    Example:
        @command("hello", "say hello to the world")
        def hello(cmd, ctx, args):
            ctx.stdout.write("Hello world!\\n")
    """

    def decorator(func: RunFunc) -> Command:
        return Command(usage_line, short, long, run=func, **kwargs)

    return decorator
