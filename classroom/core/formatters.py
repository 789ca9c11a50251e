# classroom/core/formatters.py

# all pure utilities & date/time helpers
# must never import from models!

import datetime
from typing import Any

PLACEHOLDER = "-"

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_optional(value: Any, placeholder: str = PLACEHOLDER) -> str:
    if value is None or value == "":
        return placeholder

    return str(value)


def format_rate(value: float) -> str:
    return f"{value:.1f}%"


def format_hours(value: float) -> str:
    return f"{value:.1f}h"


def format_label(key: str) -> str:
    """Turns an enum value such as `in_progress` into `In Progress`."""
    return key.replace("_", " ").title()


# === date helpers ===


def to_iso_date(value: datetime.date | datetime.datetime | str) -> str:
    """
    Normalizes a date-like value to a `YYYY-MM-DD` string.

    Strings are trusted to already be ISO formatted; anything after the date part
    (e.g. the time of an ISO timestamp) is dropped.
    """
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()

    if isinstance(value, datetime.date):
        return value.isoformat()

    return value[:10]


def parse_iso_date(value: str) -> datetime.date:
    return datetime.date.fromisoformat(value[:10])


def parse_clock_time(value: str) -> datetime.time:
    """Parses a 24-hour `HH:MM` (or `HH:MM:SS`) string."""
    return datetime.time.fromisoformat(value)


def hours_between(start_time: str, end_time: str) -> float:
    """
    Returns the number of hours between two clock times on the same day.

    Negative spans (end before start) count as zero.
    """
    start = parse_clock_time(start_time)
    end = parse_clock_time(end_time)

    start_minutes = start.hour * 60 + start.minute + start.second / 60
    end_minutes = end.hour * 60 + end.minute + end.second / 60

    return max(end_minutes - start_minutes, 0) / 60


WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def day_of_week(value: str) -> str:
    return WEEKDAYS[parse_iso_date(value).weekday()]


def format_month_key(value: str) -> str:
    return value[:7]
