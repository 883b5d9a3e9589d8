"""
Usage and help rendering.

Produces the text for bare invocations, 'help', 'help <command>', and a
single reference document covering every command and topic.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .constants import HELP_COMMAND, NAME_COLUMN_WIDTH
from .errors import TemplateError

if TYPE_CHECKING:
    from .command import CommandProtocol


def trim(s: str) -> str:
    """Strip leading and trailing whitespace."""
    return s.strip()


def capitalize(s: str) -> str:
    """
    Title-case the first character, leaving the rest unchanged.

    Works on code points, so a multi-byte leading character is converted as a
    unit. A character whose title case expands to several characters, like
    "ß", is left unchanged. The empty string is returned as-is.
    """
    if not s:
        return s
    head = s[0].title()
    if len(head) != 1:
        head = s[0]
    return head + s[1:]


class HelpRenderer:
    """
    Renders usage and help text from command metadata.

    Args:
        name: Application name
        description: One-line application description
        commands: Commands in display order
    """

    def __init__(
        self, name: str, description: str, commands: Iterable[CommandProtocol]
    ) -> None:
        self.name = name
        self.description = description
        self.commands = commands

    def render_usage(self) -> str:
        """Top-level usage listing every runnable command."""
        lines = [
            self.description,
            "",
            "Usage:",
            "",
            f"  {self.name} command [arguments]",
            "",
            "The commands are:",
        ]
        for cmd in self.commands:
            if cmd.runnable:
                lines.append(f"  {self._column(cmd)} {cmd.short}")
        lines += [
            "",
            f'Use "{self.name} {HELP_COMMAND} [command]" for more information '
            "about a command.",
            "",
            "",
        ]
        return "\n".join(lines)

    def render_command_help(self, cmd: CommandProtocol) -> str:
        """
        Help for one command or topic.

        The usage line is shown only for runnable commands; declared flags
        follow the long description.
        """
        parts = []
        if cmd.runnable:
            parts.append(f"usage: {self.name} {cmd.usage_line}\n\n")
        parts.append(f"{trim(cmd.long)}\n\n")
        options = self._options(cmd)
        if options:
            parts.append(f"{options}\n")
        return "".join(parts)

    def render_documentation(self) -> str:
        """
        Reference document covering every command and topic.

        Each section is headed by the capitalized short description.
        """
        parts = [f"{capitalize(trim(self.description))}\n\n"]
        for cmd in self.commands:
            title = capitalize(trim(cmd.short)) or cmd.name
            parts.append(f"{title}\n\n")
            if cmd.runnable:
                parts.append(f"Usage:\n\n\t{self.name} {cmd.usage_line}\n\n")
            long = trim(cmd.long)
            if long:
                parts.append(f"{long}\n\n")
        return "".join(parts)

    def _column(self, cmd: CommandProtocol) -> str:
        try:
            return f"{cmd.name:<{NAME_COLUMN_WIDTH}}"
        except (TypeError, ValueError) as e:
            raise TemplateError(
                "cannot render command name", command=repr(cmd), error=e
            ) from e

    @staticmethod
    def _options(cmd: CommandProtocol) -> str:
        if cmd.custom_flags or not cmd.runnable:
            return ""
        flags = getattr(cmd, "flags", None)
        if flags is None or not hasattr(flags, "format_options"):
            return ""
        return flags.format_options().rstrip("\n")
