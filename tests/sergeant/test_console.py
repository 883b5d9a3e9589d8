"""
Tests for sergeant/console.py.
"""

import io

import pytest

from sergeant import Console


class _TTY(io.StringIO):
    def isatty(self):
        return True


@pytest.mark.unit
class TestConsole:
    """Test Console output."""

    def test_writes_text_verbatim(self):
        stream = io.StringIO()
        text = "  app command [arguments]\n:smile: [bold]x[/bold]\n"

        Console(stream).write(text)

        assert stream.getvalue() == text

    def test_error_unstyled_off_terminal(self):
        stream = io.StringIO()

        Console(stream).error("app: unknown subcommand \"x\"\n")

        assert stream.getvalue() == "app: unknown subcommand \"x\"\n"

    def test_empty_write(self):
        stream = io.StringIO()

        Console(stream).write("")

        assert stream.getvalue() == ""

    def test_no_color_env_on_terminal(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")

        console = Console(_TTY())

        assert console.no_color is True

    def test_terminal_enables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)

        assert Console(_TTY()).no_color is False

    def test_styled_error_keeps_text(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        stream = _TTY()

        Console(stream).error("app: [x] failed\n")

        assert "app: [x] failed" in stream.getvalue()

    def test_defaults_to_stdout(self, capsys):
        Console().write("hello\n")

        assert capsys.readouterr().out == "hello\n"
