"""
Exception hierarchy for the sergeant package.

All framework errors derive from SergeantError, which carries a message plus
optional keyword context rendered as key=value pairs.
"""

from typing import Any


class SergeantError(Exception):
    """
    Base exception for all sergeant errors.

    Example:
        try:
            registry.find("deploy")
        except SergeantError as e:
            lg.error("lookup failed", extra={"exception": e})
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class CommandError(SergeantError):
    """Raised when a command cannot be invoked or fails while running."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(f"Command error: {message}", **context)


class UnknownCommandError(SergeantError, LookupError):
    """Raised when no runnable command matches the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown subcommand '{name}'")


class UnknownHelpTopicError(SergeantError, LookupError):
    """Raised when no command, runnable or not, matches a help topic."""

    def __init__(self, topic: str) -> None:
        self.topic = topic
        super().__init__(f"unknown help topic '{topic}'")


class RegistryFrozenError(SergeantError):
    """Raised when commands are added after dispatch has begun."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Cannot add command '{name}': registry is frozen once dispatch begins"
        )


class ParseError(SergeantError):
    """Raised by the argument parser adapter instead of exiting the process."""

    def __init__(self, prog: str, message: str) -> None:
        self.prog = prog
        self.reason = message
        super().__init__(f"{prog}: {message}")


class ConfigError(SergeantError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found
        - Invalid YAML syntax
        - Configuration value of the wrong type
    """

    pass


class TemplateError(SergeantError):
    """Raised when help or usage text cannot be rendered."""

    pass
