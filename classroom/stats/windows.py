# classroom/stats/windows.py

"""
Named time windows ("today", "last 7 days", "last 30 days") over date-stamped records.

Dates are compared as `YYYY-MM-DD` strings, which order correctly because the format is
zero-padded. Comparisons are date-only and no timezone conversion happens: callers pass
`now` (or rely on the local `datetime.date.today()`) in the deployment's calendar.
"""

import datetime
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any, TypeVar

from classroom.core.formatters import to_iso_date

T = TypeVar("T")

DateLike = datetime.date | datetime.datetime | str


class Window(Enum):
    TODAY = 0
    LAST_7_DAYS = 7
    LAST_30_DAYS = 30

    @property
    def days(self) -> int:
        return self.value


def resolve_today(now: DateLike | None = None) -> datetime.date:
    if now is None:
        return datetime.date.today()

    if isinstance(now, datetime.datetime):
        return now.date()

    if isinstance(now, datetime.date):
        return now

    return datetime.date.fromisoformat(now[:10])


def today_iso(now: DateLike | None = None) -> str:
    return resolve_today(now).isoformat()


def offset_iso(days: int, now: DateLike | None = None) -> str:
    """Returns the ISO date `days` after today (negative values go back in time)."""
    return (resolve_today(now) + datetime.timedelta(days=days)).isoformat()


def window_start(window: Window, now: DateLike | None = None) -> str:
    return offset_iso(-window.days, now)


def _date_of(record: Any, field: str | Callable[[Any], Any]) -> str | None:
    value = field(record) if callable(field) else getattr(record, field, None)

    return to_iso_date(value) if value else None


def select_window(
    records: Iterable[T],
    window: Window,
    now: DateLike | None = None,
    field: str | Callable[[T], Any] = "date",
) -> list[T]:
    """
    Selects the records that fall inside a named window.

    Args:
        records (Iterable[T]): Records carrying an ISO date in `field`.
        window (Window): `TODAY` keeps records dated exactly today; the other windows keep
            records dated on or after today minus the window length.
        now (date | datetime | str | None): The reference date, defaults to the local date.
        field (str | Callable): The attribute name (or extractor) of the record date.

    Returns:
        list[T]: The matching records, input order preserved. Records without a date are excluded.
    """
    today = today_iso(now)

    if window is Window.TODAY:
        return [r for r in records if _date_of(r, field) == today]

    start = window_start(window, now)

    return [r for r in records if (d := _date_of(r, field)) is not None and d >= start]


def select_today(records: Iterable[T], now: DateLike | None = None, field="date") -> list[T]:
    return select_window(records, Window.TODAY, now, field)


def select_on(records: Iterable[T], date: DateLike, field="date") -> list[T]:
    target = to_iso_date(date)

    return [r for r in records if _date_of(r, field) == target]
