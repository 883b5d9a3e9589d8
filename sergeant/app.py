"""
Application entry point.

An Application owns the identity (name, description), the ordered command
registry, the exit coordinator and the loggers for one program:

    app = Application(
        "helloworld",
        "Prints 'Hello World!' to the console.",
        commands=[cmd_hello],
    )
    sys.exit(app.main())
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import IO, Any

from .command import CommandProtocol
from .config import AppConfig, load_config
from .console import Console
from .constants import EXIT_USAGE
from .dispatch import Dispatcher
from .errors import ConfigError
from .exit import ExitCoordinator
from .help import HelpRenderer
from .log import Logger, LoggerFactory
from .parser import GlobalParser
from .registry import CommandRegistry


class Application:
    """
    A command-line application made of a flat list of subcommands.

    Args:
        name: Application name shown in usage text
        description: One-line description shown above usage
        commands: Commands in display order
        config: Configuration (default: empty AppConfig)
        stdout: Output stream (default: sys.stdout at write time)
        stderr: Error stream (default: sys.stderr at write time)
    """

    def __init__(
        self,
        name: str = "",
        description: str = "",
        commands: Iterable[CommandProtocol] | None = None,
        config: AppConfig | None = None,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ) -> None:
        self.config = config if config is not None else AppConfig()
        self.name = self.config.name or name
        self.description = self.config.description or description
        self._stdout = stdout
        self._stderr = stderr
        self.lg: Logger = self._create_logger()
        self.registry = CommandRegistry(lg=self.lg)
        self.exit = ExitCoordinator(lg=LoggerFactory.derive(self.lg, "exit"))
        self.parser = GlobalParser(prog=self.name)
        self.options = argparse.Namespace()
        if commands is not None:
            self.registry.extend(commands)

    @classmethod
    def from_config(
        cls,
        path: str | Path,
        commands: Iterable[CommandProtocol] | None = None,
        **kwargs: Any,
    ) -> Application:
        """
        Create an application whose identity and logging come from YAML.

        Raises:
            ConfigError: If the file cannot be loaded
        """
        return cls(commands=commands, config=load_config(path), **kwargs)

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> IO[str]:
        return self._stderr if self._stderr is not None else sys.stderr

    def _create_logger(self) -> Logger:
        return LoggerFactory.create(
            "/", self.config.logging.to_log_config(), stream=self._stderr
        )

    def add_command(self, cmd: CommandProtocol) -> None:
        """Append a command. Must be called before main()."""
        self.registry.add(cmd)

    def add_argument(self, *args: Any, **kwargs: Any) -> argparse.Action:
        """Add a global flag, parsed before the subcommand token."""
        return self.parser.add_argument(*args, **kwargs)

    def atexit(self, callback: Callable[[], object]) -> None:
        """Register a callback to run when the application finalizes."""
        self.exit.atexit(callback)

    def set_exit_status(self, n: int) -> None:
        self.exit.set_exit_status(n)

    @property
    def renderer(self) -> HelpRenderer:
        return HelpRenderer(self.name, self.description, self.registry)

    def usage(self) -> str:
        """Top-level usage text."""
        return self.renderer.render_usage()

    def documentation(self) -> str:
        """Reference text covering every command and help topic."""
        return self.renderer.render_documentation()

    def _dispatcher(self) -> Dispatcher:
        return Dispatcher(
            self.name,
            self.description,
            self.registry,
            self.exit,
            self.lg,
            global_parser=self.parser,
            stdout=self._stdout,
            stderr=self._stderr,
        )

    def configure(self, options: argparse.Namespace) -> None:
        """
        Apply global flags: load --config and adjust the log level.

        Override in subclasses for custom configuration after flag parsing.
        """
        config_path = getattr(options, "config", None)
        if config_path:
            loaded = load_config(config_path)
            self.config.logging = loaded.logging
            if loaded.name:
                self.name = loaded.name
            if loaded.description:
                self.description = loaded.description
            self.config.source = loaded.source

        self.config.apply_args(options)
        LoggerFactory.set_level(self.lg, self.config.logging.level)
        self.lg.debug(
            "configured",
            extra={"config": self.config.source, "argv": " ".join(sys.argv)},
        )

    def main(self, argv: list[str] | None = None) -> int:
        """
        Run the application.

        Returns EXIT_SUCCESS after 'help'; every other path ends the run by
        raising SystemExit with the final status.

        Args:
            argv: Arguments without the program name (default: sys.argv[1:])
        """
        argv = list(sys.argv[1:] if argv is None else argv)
        dispatcher = self._dispatcher()
        self.options, args = dispatcher.parse_global(argv)

        try:
            self.configure(self.options)
        except ConfigError as e:
            Console(self.stderr).error(f"{self.name}: {e}\n")
            raise SystemExit(EXIT_USAGE) from e

        # Config may have renamed the application
        self.parser.prog = self.name
        dispatcher.name = self.name
        dispatcher.description = self.description
        return dispatcher.dispatch(args, self.options)


def run(
    name: str,
    description: str,
    commands: Iterable[CommandProtocol],
    argv: list[str] | None = None,
) -> int:
    """Build an Application and run it."""
    return Application(name, description, commands).main(argv)
