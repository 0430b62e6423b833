"""
Shared fakes for the advisor's collaborators.
"""

from __future__ import annotations

import pytest

from coretools_advisor.common import CommandError
from coretools_advisor.config import AdvisorConfig
from coretools_advisor.output import BufferedOutputChannel
from coretools_advisor.prompts import MessageItem
from coretools_advisor.settings import InMemorySettingsStore


class FakeRunner:
    """Command runner answering from a table of command tuples.

    Values are stdout strings or exceptions to raise; unknown commands fail
    like a missing executable.
    """

    def __init__(self, responses: dict[tuple[str, ...], object] | None = None):
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, *argv: str, output=None, timeout=None) -> str:
        self.calls.append(tuple(argv))
        response = self.responses.get(tuple(argv))
        if response is None:
            raise CommandError(tuple(argv), -1, reason=f"Command not found: {argv[0]}")
        if isinstance(response, BaseException):
            raise response
        if output is not None and response:
            output.append_line(str(response))
        return str(response)


class FakePrompter:
    """Prompter replaying scripted choices by title (None dismisses)."""

    def __init__(self, choices: list[str | None] | None = None):
        self.choices = list(choices or [])
        self.shown: list[tuple[str, tuple[MessageItem, ...], bool]] = []

    def show_warning_message(self, message: str, *items: MessageItem, modal: bool = False):
        self.shown.append((message, items, modal))
        if not self.choices:
            return None
        title = self.choices.pop(0)
        for item in items:
            if item.title == title:
                return item
        return None


class RecordingOpener:
    def __init__(self):
        self.urls: list[str] = []

    def __call__(self, url: str) -> None:
        self.urls.append(url)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def prompter():
    return FakePrompter()


@pytest.fixture
def opener():
    return RecordingOpener()


@pytest.fixture
def settings():
    return InMemorySettingsStore()


@pytest.fixture
def output():
    return BufferedOutputChannel()


@pytest.fixture
def config():
    return AdvisorConfig()
