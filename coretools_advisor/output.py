"""
Append-only output channel shown to the user while package managers run.
"""

from __future__ import annotations

import sys
from typing import TextIO


class OutputChannel:
    """Write-only text sink."""

    def append_line(self, text: str) -> None:
        raise NotImplementedError

    def show(self) -> None:
        """Bring the channel to the user's attention."""


class StreamOutputChannel(OutputChannel):
    """Output channel writing to a text stream (stdout by default)."""

    def __init__(self, name: str = "Azure Functions", stream: TextIO | None = None):
        self.name = name
        self.stream = stream or sys.stdout
        self._shown = False

    def append_line(self, text: str) -> None:
        self.stream.write(text + "\n")
        self.stream.flush()

    def show(self) -> None:
        if not self._shown:
            self.stream.write(f"=== {self.name} ===\n")
            self._shown = True


class BufferedOutputChannel(OutputChannel):
    """Output channel collecting lines in memory."""

    def __init__(self):
        self.lines: list[str] = []
        self.shown = False

    def append_line(self, text: str) -> None:
        self.lines.append(text)

    def show(self) -> None:
        self.shown = True
