# classroom/stats/filters.py

"""
Predicate-based narrowing of record collections.

Supports the filter bars of the attendance, homework, marks and schedule tables:
- free-text search, case-insensitive substring over one or more string fields
- exact match on categorical fields (class id, status, subject, ...)
- a single date, or an inclusive date range, compared as ISO strings

Predicates are combined with logical AND. With no predicates the input is returned unchanged.
A record missing an optional field never matches a search on that field, and never raises.
"""

from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any, TypeVar

from classroom.core.formatters import to_iso_date
from classroom.core.utils import normalize

T = TypeVar("T")

Predicate = Callable[[Any], bool]


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def matches_search(record: Any, query: str, fields: Iterable[str]) -> bool:
    """
    Returns True if any of `fields` contains `query`, ignoring case.

    Non-string and missing field values are treated as non-matching.
    """
    query = normalize(query)

    for field in fields:
        value = _plain(getattr(record, field, None))

        if isinstance(value, str) and query in value.lower():
            return True

    return False


def _matches_equals(record: Any, equals: Mapping[str, Any]) -> bool:
    for field, expected in equals.items():
        if expected is None:
            continue

        if _plain(getattr(record, field, None)) != _plain(expected):
            return False

    return True


def _record_date(record: Any, field: str) -> str | None:
    value = getattr(record, field, None)

    return to_iso_date(value) if value else None


def build_predicate(
    search: str | None = None,
    search_fields: Iterable[str] = (),
    equals: Mapping[str, Any] | None = None,
    date_field: str = "date",
    date_from: Any = None,
    date_to: Any = None,
    on_date: Any = None,
) -> Predicate | None:
    """
    Combines the given filter options into one predicate.

    Returns:
        Predicate | None: None when no option is active, so callers can skip filtering entirely.
    """
    checks: list[Predicate] = []

    if search and search.strip():
        fields = tuple(search_fields)
        checks.append(lambda r: matches_search(r, search, fields))

    if equals and any(v is not None for v in equals.values()):
        checks.append(lambda r: _matches_equals(r, equals))

    if on_date:
        target = to_iso_date(on_date)
        checks.append(lambda r: _record_date(r, date_field) == target)

    if date_from:
        start = to_iso_date(date_from)
        checks.append(
            lambda r: (d := _record_date(r, date_field)) is not None and d >= start
        )

    if date_to:
        end = to_iso_date(date_to)
        checks.append(
            lambda r: (d := _record_date(r, date_field)) is not None and d <= end
        )

    if not checks:
        return None

    return lambda record: all(check(record) for check in checks)


def filter_records(
    records: Iterable[T],
    *,
    search: str | None = None,
    search_fields: Iterable[str] = (),
    equals: Mapping[str, Any] | None = None,
    date_field: str = "date",
    date_from: Any = None,
    date_to: Any = None,
    on_date: Any = None,
) -> list[T]:
    """
    Returns the records satisfying every active filter option.

    Args:
        records (Iterable[T]): The collection to narrow.
        search (str | None): Free-text query; blank queries are ignored.
        search_fields (Iterable[str]): Attribute names searched by `search`.
        equals (Mapping[str, Any] | None): Attribute name to required value. Enum members and
            their string values are interchangeable; None values are ignored.
        date_field (str): Attribute holding the ISO date used by the date options.
        date_from (date | str | None): Inclusive lower bound.
        date_to (date | str | None): Inclusive upper bound.
        on_date (date | str | None): Exact date match.

    Returns:
        list[T]: Matching records in input order.
    """
    predicate = build_predicate(
        search=search,
        search_fields=search_fields,
        equals=equals,
        date_field=date_field,
        date_from=date_from,
        date_to=date_to,
        on_date=on_date,
    )

    if predicate is None:
        return list(records)

    return list(filter(predicate, records))
