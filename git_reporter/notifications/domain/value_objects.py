"""Value objects for the notifications domain."""

from dataclasses import dataclass
from enum import Enum


class NoticeLevel(str, Enum):
    """Severity of a user-visible notice."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """Value object representing a message shown to the user.

    Attributes:
        level: Severity of the notice
        text: The message text
    """

    level: NoticeLevel
    text: str

    def __post_init__(self) -> None:
        """Validate the notice."""
        if not self.text:
            raise ValueError("Notice text cannot be empty")
