from datetime import datetime

from git_reporter.core.date_format import format_date

VALUE = datetime(2024, 3, 5, 7, 8, 9, 123000)


def test_default_format() -> None:
    """The default format renders an ISO day."""
    assert format_date(VALUE) == "2024-03-05"


def test_time_tokens() -> None:
    """Hour, minute, second and millisecond tokens are padded."""
    assert format_date(VALUE, "YYYY-MM-DD HH:mm:ss.SSS") == "2024-03-05 07:08:09.123"


def test_unpadded_and_short_tokens() -> None:
    """Single-letter tokens are not padded and YY keeps two digits."""
    assert format_date(VALUE, "D/M/YY H") == "5/3/24 7"


def test_bracketed_text_is_literal() -> None:
    """Text in square brackets is copied without substitution."""
    assert format_date(VALUE, "[Day] DD [of] MM") == "Day 05 of 03"
