"""
Tests for sergeant/log.py.

Tests logging functionality including:
- Level resolution
- TRACE level
- Extra field formatting
- Derived loggers
"""

import io
import logging

import pytest

from sergeant.log import (
    LEVEL_DISABLED,
    TRACE,
    LogConfig,
    Logger,
    LoggerFactory,
    resolve_level,
)


@pytest.mark.unit
class TestResolveLevel:
    """Test resolve_level()."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("trace", TRACE),
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("Warning", logging.WARNING),
            ("error", logging.ERROR),
            ("false", LEVEL_DISABLED),
        ],
    )
    def test_names(self, name, expected):
        assert resolve_level(name) == expected

    def test_numeric_passthrough(self):
        assert resolve_level(17) == 17

    def test_false_disables(self):
        assert resolve_level(False) == LEVEL_DISABLED

    def test_true_rejected(self):
        with pytest.raises(ValueError, match="not valid"):
            resolve_level(True)

    def test_unknown_name(self):
        with pytest.raises(ValueError) as exc_info:
            resolve_level("loud")

        assert "Unknown log level 'loud'" in str(exc_info.value)


@pytest.mark.unit
class TestLogger:
    """Test Logger and LoggerFactory.create()."""

    def test_create_returns_logger(self):
        lg = LoggerFactory.create("/", LogConfig.from_params("info"), io.StringIO())

        assert isinstance(lg, Logger)
        assert lg.propagate is False
        assert lg.level == logging.INFO

    def test_message_format(self):
        stream = io.StringIO()
        lg = LoggerFactory.create("/", LogConfig.from_params("info"), stream)

        lg.info("dispatching", extra={"command": "hello", "args": 2})

        line = stream.getvalue().rstrip("\n")
        assert line.startswith("[")
        assert line.endswith("] [I] dispatching [command:hello] [args:2] [/]")

    def test_exception_extra(self):
        stream = io.StringIO()
        lg = LoggerFactory.create("/", LogConfig.from_params("info"), stream)

        lg.error("failed", extra={"exception": ValueError("boom")})

        assert "[exception:ValueError: boom]" in stream.getvalue()

    def test_trace_level(self):
        stream = io.StringIO()
        lg = LoggerFactory.create("/", LogConfig.from_params("trace"), stream)

        lg.trace("fine detail")

        assert "[T] fine detail" in stream.getvalue()

    def test_trace_suppressed_at_debug(self):
        stream = io.StringIO()
        lg = LoggerFactory.create("/", LogConfig.from_params("debug"), stream)

        lg.trace("fine detail")

        assert stream.getvalue() == ""

    def test_disabled_logger_is_silent(self):
        stream = io.StringIO()
        lg = LoggerFactory.create("/", LogConfig.from_params("false"), stream)

        lg.critical("nobody hears this")

        assert stream.getvalue() == ""

    def test_colors(self):
        stream = io.StringIO()
        lg = LoggerFactory.create("/", LogConfig.from_params("info", colors=True), stream)

        lg.warning("careful")

        assert stream.getvalue().startswith("\x1b[33m")

    def test_set_level_after_use(self):
        stream = io.StringIO()
        lg = LoggerFactory.create("/", LogConfig.from_params("info"), stream)
        lg.debug("before")

        LoggerFactory.set_level(lg, "debug")
        lg.debug("after")

        assert "before" not in stream.getvalue()
        assert "after" in stream.getvalue()


@pytest.mark.unit
class TestDerive:
    """Test LoggerFactory.derive()."""

    def test_name_and_shared_output(self):
        stream = io.StringIO()
        root = LoggerFactory.create("/", LogConfig.from_params("info"), stream)

        child = LoggerFactory.derive(root, "hello")
        child.info("hi")

        assert child.name == "/hello"
        assert "[I] hi [/hello]" in stream.getvalue()

    def test_nested_path(self):
        root = LoggerFactory.create("/", LogConfig.from_params("info"), io.StringIO())

        child = LoggerFactory.derive(LoggerFactory.derive(root, "app"), ["a", "b"])

        assert child.name == "/app/a/b"

    def test_child_follows_root_level(self):
        stream = io.StringIO()
        root = LoggerFactory.create("/", LogConfig.from_params("info"), stream)
        child = LoggerFactory.derive(root, "hello")
        child.debug("hidden")

        LoggerFactory.set_level(child, "debug")
        child.debug("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()
        assert root.level == logging.DEBUG
