"""
User prompts for the install and upgrade advisories.

A prompter shows a warning with a set of choices and returns the chosen
item, or None when the user dismisses the prompt.
"""

from __future__ import annotations

import sys
import webbrowser
from dataclasses import dataclass
from typing import Callable, Sequence


@dataclass(frozen=True)
class MessageItem:
    """A choice offered in a prompt."""
    title: str


class DialogResponses:
    """Standard prompt choices."""
    INSTALL = MessageItem("Install")
    UPDATE = MessageItem("Update")
    LEARN_MORE = MessageItem("Learn more")
    DONT_WARN_AGAIN = MessageItem("Don't warn again")
    SKIP_FOR_NOW = MessageItem("Skip for now")
    CANCEL = MessageItem("Cancel")


class UserCancelledError(Exception):
    """Raised by prompters that report dismissal as cancellation."""


class Prompter:
    """Interface for showing warnings with choices."""

    def show_warning_message(
        self,
        message: str,
        *items: MessageItem,
        modal: bool = False,
    ) -> MessageItem | None:
        raise NotImplementedError


class ConsolePrompter(Prompter):
    """
    Prompter reading choices from an interactive terminal.

    Non-interactive sessions (CI, pipes) dismiss every prompt.
    """

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def show_warning_message(
        self,
        message: str,
        *items: MessageItem,
        modal: bool = False,
    ) -> MessageItem | None:
        if not self.stdin.isatty():
            return None

        print(f"\n⚠️  {message}", file=self.stdout)
        for index, item in enumerate(items, start=1):
            print(f"  [{index}] {item.title}", file=self.stdout)
        hint = "Choose an option" if modal else "Choose an option (Enter to dismiss)"
        print(f"{hint}: ", end="", file=self.stdout, flush=True)

        response = self.stdin.readline().strip()
        if not response:
            return None
        if response.isdigit() and 1 <= int(response) <= len(items):
            return items[int(response) - 1]
        for item in items:
            if item.title.lower() == response.lower():
                return item
        return None


def open_url(url: str) -> None:
    """Open documentation in the user's browser."""
    webbrowser.open(url)


def prompt_until_resolved(
    prompter: Prompter,
    message: str,
    items: Sequence[MessageItem],
    learn_more_url: str,
    opener: Callable[[str], None] = open_url,
    modal: bool = False,
) -> MessageItem | None:
    """
    Show a prompt until the user picks something other than "Learn more".

    State machine: Prompting --LEARN_MORE--> Prompting (documentation is
    opened and the prompt re-shown); any item of the terminal set ends the
    loop. The terminal set is every offered item except LEARN_MORE, plus
    None for a dismissed prompt.

    Returns:
        The terminal selection (None if dismissed)
    """
    terminal: frozenset[MessageItem | None] = frozenset(
        [item for item in items if item != DialogResponses.LEARN_MORE] + [None]
    )

    while True:
        result = prompter.show_warning_message(message, *items, modal=modal)
        if result == DialogResponses.LEARN_MORE and result in items:
            opener(learn_more_url)
            continue
        if result in terminal:
            return result
        # A choice that was never offered counts as dismissal
        return None
