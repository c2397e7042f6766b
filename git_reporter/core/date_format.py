"""Date display formatting with dayjs-style format strings."""

import re
from datetime import datetime

DEFAULT_DATE_FORMAT = "YYYY-MM-DD"

# Longest tokens first so "YYYY" wins over "YY" and "MM" over "M"
_TOKEN_PATTERN = re.compile(r"\[([^\]]*)\]|YYYY|YY|SSS|MM|M|DD|D|HH|H|mm|ss")


def format_date(value: datetime, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """
    Render a datetime using a dayjs-style format string.

    Supported tokens: YYYY, YY, MM, M, DD, D, HH, H, mm, ss, SSS. Text inside
    square brackets is copied literally; anything else passes through.

    Args:
        value: Datetime to render
        fmt: Format string, e.g. "YYYY-MM-DD" or "DD/MM/YYYY HH:mm"

    Returns:
        The formatted string
    """

    def _replace(match: re.Match[str]) -> str:
        literal = match.group(1)
        if literal is not None:
            return literal
        token = match.group(0)
        match token:
            case "YYYY":
                return f"{value.year:04d}"
            case "YY":
                return f"{value.year % 100:02d}"
            case "MM":
                return f"{value.month:02d}"
            case "M":
                return str(value.month)
            case "DD":
                return f"{value.day:02d}"
            case "D":
                return str(value.day)
            case "HH":
                return f"{value.hour:02d}"
            case "H":
                return str(value.hour)
            case "mm":
                return f"{value.minute:02d}"
            case "ss":
                return f"{value.second:02d}"
            case "SSS":
                return f"{value.microsecond // 1000:03d}"
            case _:
                return token

    return _TOKEN_PATTERN.sub(_replace, fmt)
