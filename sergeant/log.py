"""
Logging for sergeant applications.

Thin layer over the standard logging module providing:
- A custom TRACE level below DEBUG
- Structured extra fields rendered as [key:value] after the message
- A factory that creates self-contained loggers bound to a stream
- Derived child loggers that share their parent's handlers

Example:
    >>> from sergeant.log import LoggerFactory, LogConfig
    >>>
    >>> lg = LoggerFactory.create("/", LogConfig.from_params("debug"))
    >>> lg.debug("dispatching", extra={"command": "hello"})
    [12:34:56,789] [D] dispatching [command:hello] [/]
"""

import logging
import sys
from dataclasses import dataclass
from typing import IO, Any

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# Level used when logging is disabled entirely ("false" or --quiet)
LEVEL_DISABLED = logging.CRITICAL + 1

LEVEL_NAMES: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "false": LEVEL_DISABLED,
}

DEFAULT_FORMAT = "[%(asctime)s] [%(levelname).1s] %(message)s"

# Attribute on LogRecord carrying the structured extra fields
_EXTRA_ATTR = "__sergeant__extra"


def resolve_level(level: int | str | bool) -> int:
    """
    Resolve a level name, number or False into a numeric logging level.

    Args:
        level: Level name (case-insensitive), numeric level, or False to disable

    Returns:
        int: Numeric logging level

    Raises:
        ValueError: If the level name is unknown
    """
    if level is False:
        return LEVEL_DISABLED
    if level is True:
        raise ValueError("Log level 'true' is not valid (use a level name or false)")
    if isinstance(level, int):
        return level
    try:
        return LEVEL_NAMES[str(level).lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level '{level}' (expected one of: {', '.join(LEVEL_NAMES)})"
        ) from None


@dataclass
class LogConfig:
    """Configuration for a logger."""

    level: int = logging.INFO
    colors: bool = False

    @classmethod
    def from_params(cls, level: int | str | bool = "info", colors: bool = False):
        """Create a config from a level name or number."""
        return cls(level=resolve_level(level), colors=colors)

    @property
    def disabled(self) -> bool:
        return self.level >= LEVEL_DISABLED


class Logger(logging.Logger):
    """
    Logger with a TRACE level and structured extra fields.

    Extra fields passed via ``extra={...}`` are kept together on the record so
    the formatter can render them after the message instead of merging them
    into the record's attribute namespace.
    """

    def __init__(self, name: str, level: int = logging.NOTSET) -> None:
        super().__init__(name, level)
        self._root_logger: Logger | None = None

    def makeRecord(  # type: ignore[override]
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: Any,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: dict[str, Any] | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        """Create log record, attaching extra fields under a private attribute."""
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, sinfo=sinfo
        )
        setattr(record, _EXTRA_ATTR, dict(extra) if extra else {})
        return record

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log a TRACE level message.

        Args:
            msg: Log message
            *args: Message format arguments
            **kwargs: Additional keyword arguments including 'extra' for structured data
        """
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    def setLevel(self, level: int | str) -> None:
        """Set level and clear this logger's cache.

        Loggers created by the factory are not registered with the logging
        manager, so the manager never clears their cache on level changes.
        """
        super().setLevel(level)
        self._cache.clear()

    def isEnabledFor(self, level: int) -> bool:
        """Check if enabled, deferring to the root logger for derived loggers."""
        if self._root_logger is not None and self.level == logging.NOTSET:
            return self._root_logger.isEnabledFor(level)
        return super().isEnabledFor(level)


class LogFormatter(logging.Formatter):
    """Formatter rendering extra fields and the logger name after the message."""

    _COLORS = {
        TRACE: "\x1b[38;5;244m",
        logging.DEBUG: "\x1b[36m",
        logging.INFO: "\x1b[32m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[1;31m",
    }
    _RESET = "\x1b[0m"

    def __init__(self, config: LogConfig) -> None:
        super().__init__(DEFAULT_FORMAT)
        self._config = config

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        base = super().formatTime(record, "%H:%M:%S")
        return f"{base},{int(record.msecs):03d}"

    @staticmethod
    def _format_extra(record: logging.LogRecord) -> str:
        extra = getattr(record, _EXTRA_ATTR, None)
        if not extra:
            return ""
        parts = []
        for key, value in extra.items():
            if isinstance(value, BaseException):
                value = f"{value.__class__.__name__}: {value}"
            parts.append(f"[{key}:{value}]")
        return " " + " ".join(parts)

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        # Exception text, if any, follows the first line
        head, sep, tail = text.partition("\n")
        head += self._format_extra(record) + f" [{record.name}]"
        if self._config.colors:
            color = self._COLORS.get(record.levelno, "")
            head = f"{color}{head}{self._RESET}" if color else head
        return head + sep + tail


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create(
        name: str,
        config: LogConfig,
        stream: IO[str] | None = None,
        logger_class: type[Logger] = Logger,
    ) -> Logger:
        """
        Create a standalone logger writing to a stream.

        The logger is not registered with the logging module's global manager,
        so each application owns its loggers and repeated creation in tests
        never accumulates handlers.

        Args:
            name: Logger name (e.g. "/" or "/hello")
            config: Logger configuration
            stream: Output stream (default: sys.stderr)
            logger_class: Logger class to use

        Returns:
            Configured logger instance
        """
        lg = logger_class(name, config.level)
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(LogFormatter(config))
        lg.addHandler(handler)
        lg.propagate = False
        lg.trace(
            "created logger",
            extra={"level": logging.getLevelName(config.level)},
        )
        return lg

    @staticmethod
    def derive(parent: Logger, name: str | list[str]) -> Logger:
        """
        Derive a child logger that shares the parent's handlers and level.

        Args:
            parent: Parent logger
            name: Child name or list of path components

        Returns:
            Child logger named "{parent}/{name}"
        """
        parts = [name] if isinstance(name, str) else list(name)
        base = parent.name.rstrip("/")
        child = parent.__class__(f"{base}/{'/'.join(parts)}")
        root = parent._root_logger if parent._root_logger is not None else parent
        child._root_logger = root
        for handler in root.handlers:
            child.addHandler(handler)
        child.propagate = False
        return child

    @staticmethod
    def set_level(lg: Logger, level: int | str | bool) -> None:
        """Change the level of a root logger; derived loggers follow it."""
        root = lg._root_logger if lg._root_logger is not None else lg
        root.setLevel(resolve_level(level))
