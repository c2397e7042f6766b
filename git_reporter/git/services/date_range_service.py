"""Resolution of named reporting periods into concrete date ranges."""

import re
from datetime import date, datetime, time, timedelta

from git_reporter.git.domain.value_objects import DateRange, Period

END_OF_DAY = time(23, 59, 59, 999000)

_ISO_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def start_of_day(day: date) -> datetime:
    """Local midnight of the given day."""
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last millisecond of the given day."""
    return datetime.combine(day, END_OF_DAY)


def _days_since_sunday(day: date) -> int:
    # date.weekday() is Monday=0 .. Sunday=6
    return (day.weekday() + 1) % 7


class DateRangeService:
    """Maps reporting periods to DateRange values."""

    def resolve(
        self,
        period: Period | str,
        now: datetime | None = None,
        custom_range: tuple[date, date] | None = None,
    ) -> DateRange:
        """
        Resolve a named period relative to a point in time.

        Weeks start on Sunday. An unrecognized period, or "custom" without a
        custom range, resolves like "today".

        Args:
            period: Named period
            now: Reference time, defaults to the current local time
            custom_range: First and last day for the custom period

        Returns:
            Date range with both ends populated
        """
        now = now or datetime.now()
        today = now.date()

        try:
            period = Period(period)
        except ValueError:
            period = Period.TODAY

        match period:
            case Period.YESTERDAY:
                yesterday = today - timedelta(days=1)
                return DateRange(start=start_of_day(yesterday), end=end_of_day(yesterday))
            case Period.THIS_WEEK:
                sunday = today - timedelta(days=_days_since_sunday(today))
                return DateRange(start=start_of_day(sunday), end=now)
            case Period.LAST_WEEK:
                sunday = today - timedelta(days=_days_since_sunday(today) + 7)
                saturday = sunday + timedelta(days=6)
                return DateRange(start=start_of_day(sunday), end=end_of_day(saturday))
            case Period.CUSTOM if custom_range is not None:
                first_day, last_day = custom_range
                return DateRange(start=start_of_day(first_day), end=end_of_day(last_day))
            case _:
                return DateRange(start=start_of_day(today), end=now)

    def parse_custom_range(self, from_text: str, to_text: str) -> DateRange:
        """
        Build a custom range from two user-entered YYYY-MM-DD strings.

        The order of the two days is not checked.

        Args:
            from_text: First day, YYYY-MM-DD
            to_text: Last day, YYYY-MM-DD

        Returns:
            Range from the first day's midnight to the end of the last day

        Raises:
            ValueError: If either string is not a valid YYYY-MM-DD date
        """
        first_day = self._parse_day(from_text)
        last_day = self._parse_day(to_text)
        return self.resolve(Period.CUSTOM, custom_range=(first_day, last_day))

    @staticmethod
    def _parse_day(text: str) -> date:
        if not _ISO_DAY_PATTERN.match(text.strip()):
            raise ValueError(f"Please enter a date in YYYY-MM-DD format, got '{text}'")
        return date.fromisoformat(text.strip())
