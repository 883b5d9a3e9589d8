"""
Command registration and lookup.

The registry is an ordered list: insertion order is the order commands are
listed in usage output. Names are not required to be unique; lookups return
the first match.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from .errors import RegistryFrozenError, UnknownCommandError, UnknownHelpTopicError

if TYPE_CHECKING:
    from .command import CommandProtocol
    from .log import Logger


class CommandRegistry:
    """Ordered collection of commands owned by an application."""

    def __init__(
        self,
        commands: Iterable[CommandProtocol] | None = None,
        lg: Logger | None = None,
    ) -> None:
        self._commands: list[CommandProtocol] = []
        self._frozen = False
        self._lg = lg
        if commands is not None:
            self.extend(commands)

    def __iter__(self) -> Iterator[CommandProtocol]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        return any(cmd.name == name for cmd in self._commands)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the registry read-only. Called when dispatch begins."""
        self._frozen = True

    def add(self, cmd: CommandProtocol) -> None:
        """
        Append a command.

        Duplicate names are accepted, since only the first is ever found,
        and are logged at debug level.

        Raises:
            RegistryFrozenError: If dispatch has already begun
        """
        if self._frozen:
            raise RegistryFrozenError(cmd.name)
        if self._lg is not None and cmd.name in self:
            self._lg.debug(
                "duplicate command name, only the first is reachable",
                extra={"command": cmd.name},
            )
        self._commands.append(cmd)

    def extend(self, commands: Iterable[CommandProtocol]) -> None:
        for cmd in commands:
            self.add(cmd)

    def find(self, name: str) -> CommandProtocol:
        """
        Find the first runnable command with the given name.

        Raises:
            UnknownCommandError: If no runnable command matches
        """
        for cmd in self._commands:
            if cmd.name == name and cmd.runnable:
                return cmd
        raise UnknownCommandError(name)

    def lookup_topic(self, name: str) -> CommandProtocol:
        """
        Find the first command with the given name, runnable or not.

        Raises:
            UnknownHelpTopicError: If nothing matches
        """
        for cmd in self._commands:
            if cmd.name == name:
                return cmd
        raise UnknownHelpTopicError(name)

    def runnable_commands(self) -> list[CommandProtocol]:
        """Runnable commands in registration order."""
        return [cmd for cmd in self._commands if cmd.runnable]

    def names(self) -> list[str]:
        return [cmd.name for cmd in self._commands]
