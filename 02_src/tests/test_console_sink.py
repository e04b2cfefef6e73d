"""Tests for ConsoleSink."""

import io

from logrelay.sinks import ConsoleSink


class BrokenStream(io.StringIO):
    """Stream whose writes fail like a closed pipe."""

    def write(self, text):
        raise BrokenPipeError("pipe closed")


class TestConsoleSinkWrite:
    """Tests for ConsoleSink.write()."""

    def test_writes_line(self, console, console_stream):
        """Test a rendered line is written with a newline."""
        console.write("ℹ️ hello")
        assert console_stream.getvalue() == "ℹ️ hello\n"

    def test_writes_details_block(self, console, console_stream):
        """Test details are written on an indented line."""
        console.write("❌ boom", {"code": 7})

        lines = console_stream.getvalue().splitlines()
        assert lines[0] == "❌ boom"
        assert lines[1] == "   Details: {"
        assert '"code": 7' in console_stream.getvalue()

    def test_text_details(self, console, console_stream):
        """Test text details are written verbatim."""
        console.write("x", "stack trace here")
        assert "   Details: stack trace here\n" in console_stream.getvalue()

    def test_empty_details_skipped(self, console, console_stream):
        """Test empty details add no extra line."""
        console.write("x", "")
        assert console_stream.getvalue() == "x\n"

    def test_defaults_to_stdout(self, capsys):
        """Test the default stream is the current stdout."""
        ConsoleSink().write("to stdout")
        assert capsys.readouterr().out == "to stdout\n"


class TestConsoleSinkFailures:
    """Tests that local write failures never reach the caller."""

    def test_closed_stream(self):
        """Test writing to a closed stream does not raise."""
        stream = io.StringIO()
        stream.close()

        ConsoleSink(stream).write("lost line")

    def test_broken_pipe(self):
        """Test a broken pipe does not raise."""
        ConsoleSink(BrokenStream()).write("lost line", {"a": 1})

    def test_non_string_keys(self, console, console_stream):
        """Test details JSON cannot encode fall back to their repr."""
        console.write("x", {(1, 2): "v"})
        assert "   Details: {(1, 2): 'v'}\n" in console_stream.getvalue()

    def test_unrenderable_details(self, console, console_stream):
        """Test details whose rendering raises still leave the line written."""

        class Hostile:
            def __str__(self):
                raise RuntimeError("no str for you")

        console.write("kept line", {"value": Hostile()})

        output = console_stream.getvalue()
        assert output.startswith("kept line\n")
        assert "   Details: <unrenderable dict>" in output
