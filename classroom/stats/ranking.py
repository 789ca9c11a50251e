# classroom/stats/ranking.py

"""
Top-N selection for leaderboards such as top classes or busiest teachers.

Ties are broken by input order: sorting is stable, so for a fixed input sequence
the ranking is always the same.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from classroom.core import settings

T = TypeVar("T")


def _metric_getter(metric: str | Callable[[Any], float]) -> Callable[[Any], float]:
    if callable(metric):
        return metric

    return lambda item: getattr(item, metric)


def top_n(
    items: Iterable[T],
    metric: str | Callable[[T], float],
    n: int = settings.TOP_N,
) -> list[T]:
    """
    Sorts items descending by a numeric metric and keeps the first `n`.

    Args:
        items (Iterable[T]): The aggregates to rank.
        metric (str | Callable[[T], float]): An attribute name or a function returning the ranking value.
        n (int): Maximum number of items to return.

    Returns:
        list[T]: At most `n` items, highest metric first. Empty when there are no items or `n <= 0`.
    """
    if n <= 0:
        return []

    get_metric = _metric_getter(metric)
    ranked = sorted(items, key=get_metric, reverse=True)

    return ranked[:n]


def top_entries(
    mapping: Mapping[Any, Any],
    n: int = settings.TOP_N,
    metric: Callable[[Any], float] | None = None,
) -> list[tuple[Any, Any]]:
    """
    Ranks the `(key, value)` pairs of a mapping.

    When `metric` is omitted the values themselves are compared (e.g. a tabulated distribution);
    otherwise `metric(value)` is used (e.g. `lambda c: c.attendance_rate`).
    """
    get_metric = metric or (lambda value: value)

    return top_n(mapping.items(), lambda entry: get_metric(entry[1]), n)
