"""
Argument parsing adapters built on argparse.

Both parsers behave like a conventional flag parser: flags are consumed until
the first positional token, and everything from that token onward is handed
back untouched. Errors raise ParseError instead of exiting so the caller
decides how to report them.
"""

import argparse
from typing import IO, Any, NoReturn

from .errors import ParseError

# Private destination for the unparsed remainder
_REST_DEST = "_sergeant_rest"


class DefaultsHelpFormatter(argparse.HelpFormatter):
    """
    Help formatter that automatically displays default values.

    Appends "(default: X)" to each option's help text unless the default is
    suppressed, None or False.
    """

    def _get_help_string(self, action: argparse.Action) -> str:
        help_text = action.help or ""
        if action.default is argparse.SUPPRESS or action.default is None:
            return help_text
        if action.default is False:
            return help_text
        return help_text + f" (default: {action.default})"


class CommandParser(argparse.ArgumentParser):
    """
    Per-command flag parser.

    Registers -h/--help as a plain boolean flag so the owning command can
    answer it with its own usage text.
    """

    def __init__(self, prog: str, **kwargs: Any) -> None:
        kwargs.setdefault("add_help", False)
        kwargs.setdefault("allow_abbrev", False)
        kwargs.setdefault("formatter_class", DefaultsHelpFormatter)
        super().__init__(prog=prog, **kwargs)
        self.add_argument(
            "-h", "--help", action="store_true", default=False, help="show usage"
        )
        self._rest_added = False

    def error(self, message: str) -> NoReturn:
        """Raise ParseError instead of printing and exiting."""
        raise ParseError(self.prog, message)

    def _ensure_rest(self) -> None:
        if not self._rest_added:
            self.add_argument(
                _REST_DEST, nargs=argparse.REMAINDER, help=argparse.SUPPRESS
            )
            self._rest_added = True

    def parse_flags(self, args: list[str]) -> tuple[argparse.Namespace, list[str]]:
        """
        Parse leading flags and return the untouched positional remainder.

        Args:
            args: Tokens following the command name

        Returns:
            Tuple of (parsed flag namespace, remaining positional tokens)

        Raises:
            ParseError: If a flag is unknown or malformed
        """
        self._ensure_rest()
        namespace = self.parse_args(list(args))
        rest = list(getattr(namespace, _REST_DEST) or [])
        delattr(namespace, _REST_DEST)
        # A leading "--" only terminates flag parsing
        if rest and rest[0] == "--":
            rest = rest[1:]
        return namespace, rest

    def option_actions(self) -> list[argparse.Action]:
        """Flags declared by the command, excluding -h/--help and the remainder."""
        return [
            action
            for action in self._actions
            if action.dest not in ("help", _REST_DEST)
        ]

    def format_options(self) -> str:
        """Render declared flags as an "Options:" block, or "" if there are none."""
        actions = self.option_actions()
        if not actions:
            return ""
        formatter = self._get_formatter()
        formatter.start_section("Options")
        formatter.add_arguments(actions)
        formatter.end_section()
        return formatter.format_help()


class GlobalParser(CommandParser):
    """
    Application-wide parser for flags preceding the subcommand token.

    Standard flags:
        -l/--log-level LEVEL   log level (trace, debug, info, warning, error, false)
        -q/--quiet             disable logging
        -c/--config FILE       YAML configuration file
    """

    def __init__(self, prog: str, standard_args: bool = True, **kwargs: Any) -> None:
        super().__init__(prog, **kwargs)
        if standard_args:
            self.add_standard_args()

    def add_standard_args(self) -> None:
        self.add_argument(
            "-l",
            "--log-level",
            default=None,
            metavar="LEVEL",
            help="log level (default: from config or 'info')",
        )
        self.add_argument(
            "-q", "--quiet", action="store_true", default=False, help="disable logging"
        )
        self.add_argument(
            "-c",
            "--config",
            default=None,
            metavar="FILE",
            help="YAML configuration file",
        )

    def print_options(self, file: IO[str]) -> None:
        text = self.format_options()
        if text:
            file.write("\n" + text)
