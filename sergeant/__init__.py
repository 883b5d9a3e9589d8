"""
sergeant: minimal scaffolding for subcommand-style command-line programs.

Declare a flat list of commands, hand them to an Application, and call
main(). Usage and per-command help are generated from each command's
metadata.

Example:
    import sys
    from sergeant import Application, Command

    def run_hello(cmd, ctx, args):
        ctx.stdout.write("Hello world!\\n")

    hello = Command("hello", "say hello to the world", run=run_hello)

    app = Application("helloworld", "Prints 'Hello World!'.", [hello])
    sys.exit(app.main())
"""

from .app import Application, run
from .command import Command, CommandProtocol, command
from .config import AppConfig, LoggingConfig, load_config
from .console import Console
from .constants import (
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    EXIT_USAGE,
    HELP_COMMAND,
    NAME_COLUMN_WIDTH,
)
from .context import RunContext
from .dispatch import Dispatcher, DispatchState
from .errors import (
    CommandError,
    ConfigError,
    ParseError,
    RegistryFrozenError,
    SergeantError,
    TemplateError,
    UnknownCommandError,
    UnknownHelpTopicError,
)
from .exit import ExitCoordinator
from .help import HelpRenderer, capitalize, trim
from .log import LogConfig, Logger, LoggerFactory
from .parser import CommandParser, DefaultsHelpFormatter, GlobalParser
from .registry import CommandRegistry

__version__ = "0.1.0"

__all__ = [
    # Application
    "Application",
    "run",
    # Commands
    "Command",
    "CommandProtocol",
    "command",
    "CommandRegistry",
    "RunContext",
    # Dispatch and help
    "Dispatcher",
    "DispatchState",
    "HelpRenderer",
    "capitalize",
    "trim",
    # Exit handling
    "ExitCoordinator",
    "EXIT_SUCCESS",
    "EXIT_FAILURE",
    "EXIT_USAGE",
    "EXIT_INTERRUPTED",
    "HELP_COMMAND",
    "NAME_COLUMN_WIDTH",
    # Parsing
    "CommandParser",
    "GlobalParser",
    "DefaultsHelpFormatter",
    # Configuration and logging
    "AppConfig",
    "LoggingConfig",
    "load_config",
    "LogConfig",
    "Logger",
    "LoggerFactory",
    "Console",
    # Errors
    "SergeantError",
    "CommandError",
    "ConfigError",
    "ParseError",
    "RegistryFrozenError",
    "TemplateError",
    "UnknownCommandError",
    "UnknownHelpTopicError",
]
