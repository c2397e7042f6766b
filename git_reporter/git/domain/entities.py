"""Git domain entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(frozen=True)
class Commit:
    """Commit entity.

    Attributes:
        hash: Short commit hash
        date: Local wall-clock time the commit was authored
        message: Commit message, never empty
        author: Author display name
        branch: Branch the commit is attributed to, None when unresolved
        files: Reserved; always empty in the current scope
    """

    hash: str
    date: datetime
    message: str
    author: str
    branch: str | None = None
    files: tuple[str, ...] = field(default_factory=tuple)

    def with_branch(self, branch: str | None) -> "Commit":
        """Return a copy of this commit attributed to the given branch."""
        return replace(self, branch=branch)
