"""Value objects for Git domain."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

# A single git log record as produced by the repository layer. Keys are
# loosely populated: any of them may be missing or empty.
RawLogRecord = dict[str, Any]


class Period(str, Enum):
    """Named reporting period."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "thisWeek"
    LAST_WEEK = "lastWeek"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DateRange:
    """Interval of local wall-clock time, both ends inclusive."""

    start: datetime
    end: datetime

    @property
    def is_same_instant(self) -> bool:
        """True when both ends are the exact same point in time."""
        return self.start == self.end


@dataclass(frozen=True)
class LogQueryOptions:
    """Options for a single git log query.

    Attributes:
        after: Only commits authored after this time
        before: Only commits authored before this time
        max_count: Cap on the number of records returned
        author: Author filter passed to git as-is
        all_branches: Search every ref instead of the current branch only
        ref: Start history from this ref instead of HEAD
    """

    after: datetime | None = None
    before: datetime | None = None
    max_count: int | None = None
    author: str | None = None
    all_branches: bool = False
    ref: str | None = None
