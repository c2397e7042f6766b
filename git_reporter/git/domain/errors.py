"""Exceptions raised by the Git domain."""

from collections.abc import Sequence


class AccessError(RuntimeError):
    """A git command could not be run or its output could not be read."""

    def __init__(
        self, message: str, git_args: Sequence[str] = (), diagnostic: str = ""
    ) -> None:
        super().__init__(message)
        self.git_args = tuple(git_args)
        self.diagnostic = diagnostic

    def __str__(self) -> str:
        base = super().__str__()
        if self.diagnostic:
            return f"{base}: {self.diagnostic}"
        return base


class ParseError(ValueError):
    """A single git log record could not be turned into a Commit."""
