"""Concrete implementations of notifier repositories."""

import sys
from typing import TextIO

from git_reporter.notifications.domain.value_objects import Notice, NoticeLevel
from git_reporter.notifications.repositories.interfaces import NotifierRepository

_PREFIXES = {
    NoticeLevel.INFO: "ℹ",
    NoticeLevel.WARNING: "⚠",
    NoticeLevel.ERROR: "✗",
}


class ConsoleNotifierImpl(NotifierRepository):
    """Writes notices to a text stream, stderr by default."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the console notifier.

        Args:
            stream: Stream to write to. Defaults to sys.stderr at send time.
        """
        self._stream = stream

    def send(self, notice: Notice) -> None:
        stream = self._stream or sys.stderr
        print(f"{_PREFIXES[notice.level]} {notice.text}", file=stream)


class InMemoryNotifierImpl(NotifierRepository):
    """Keeps notices in a list, for hosts that display them later."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def send(self, notice: Notice) -> None:
        self.notices.append(notice)

    def texts(self, level: NoticeLevel | None = None) -> list[str]:
        """Return the text of recorded notices, optionally for one level."""
        return [n.text for n in self.notices if level is None or n.level == level]
