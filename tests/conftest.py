"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the sergeant test suite.
"""

import io
from dataclasses import dataclass

import pytest

from sergeant import Command, ExitCoordinator, LogConfig, LoggerFactory

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full application runs)"
    )
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    """Keep console output unstyled regardless of the CI environment."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)


@dataclass
class Streams:
    """Captured output and error streams."""

    stdout: io.StringIO
    stderr: io.StringIO

    @property
    def out(self) -> str:
        return self.stdout.getvalue()

    @property
    def err(self) -> str:
        return self.stderr.getvalue()


@pytest.fixture
def streams() -> Streams:
    """Provide fresh in-memory stdout/stderr streams."""
    return Streams(stdout=io.StringIO(), stderr=io.StringIO())


@pytest.fixture
def log_stream() -> io.StringIO:
    """Stream receiving log output."""
    return io.StringIO()


@pytest.fixture
def lg(log_stream):
    """Root logger writing to log_stream at debug level."""
    return LoggerFactory.create("/", LogConfig.from_params("debug"), stream=log_stream)


@pytest.fixture
def coordinator(lg) -> ExitCoordinator:
    return ExitCoordinator(lg=lg)


@pytest.fixture
def calls() -> list:
    """Collects (args) for every run of the recording commands."""
    return []


@pytest.fixture
def hello(calls) -> Command:
    """Runnable 'hello' command recording its arguments."""

    def run_hello(cmd, ctx, args):
        calls.append(list(args))
        ctx.stdout.write("Hello world!\n")

    return Command(
        "hello [name]",
        "say hi",
        """
Hello greets the world with a friendly message.
""",
        run=run_hello,
    )


@pytest.fixture
def topic() -> Command:
    """Documentation-only topic."""
    return Command("topics", "about topics", "\n  Topics are documentation only.\n")
