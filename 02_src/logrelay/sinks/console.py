"""Local sink writer (terminal)."""

import sys
from typing import Any, Protocol, TextIO

from ..formatting import render_details


class ILocalSink(Protocol):
    """Synchronous, always-available output for every event."""

    def write(self, text: str, details: Any = None) -> None:
        """Write a rendered line; never raises."""
        ...


class ConsoleSink:
    """Writes rendered lines to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved per write so a swapped sys.stdout is honoured
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str, details: Any = None) -> None:
        """Write a rendered line and an indented details block."""
        block = ""
        if details is not None and details != "":
            try:
                block = f"   Details: {render_details(details)}\n"
            except Exception:
                block = f"   Details: <unrenderable {type(details).__name__}>\n"

        try:
            stream = self.stream
            stream.write(text + "\n" + block)
            stream.flush()
        except (OSError, ValueError):
            # Closed stream, broken pipe or unencodable text: the line is lost
            return
