# classroom/stats/distribution.py

"""
Groups records by a categorical field and counts the occurrences of each value.

Only keys that are actually observed appear in the output; nothing is pre-populated
with zero counts. Records whose key is None are skipped.
"""

from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any

KeyFn = Callable[[Any], Any]


def key_getter(key: str | KeyFn) -> KeyFn:
    """Accepts an attribute name or a callable and returns a callable key extractor."""
    if callable(key):
        return key

    return lambda record: getattr(record, key, None)


def _normalize_key(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def tabulate(records: Iterable[Any], key: str | KeyFn) -> dict[Any, int]:
    """
    Counts records per key value.

    Args:
        records (Iterable[Any]): The records to group.
        key (str | Callable): An attribute name, or a function extracting the key from a record.

    Returns:
        dict[Any, int]: Observed key values mapped to their counts, in first-seen order.
            Enum keys are stored by their value.
    """
    get_key = key_getter(key)
    counts: Counter = Counter()

    for record in records:
        value = get_key(record)

        if value is None:
            continue

        counts[_normalize_key(value)] += 1

    return dict(counts)


def sorted_distribution(
    distribution: Mapping[Any, int],
    limit: int | None = None,
) -> list[tuple[Any, int]]:
    """
    Orders a distribution for display, largest count first.

    Ties keep their first-seen order. If `limit` is given, only that many entries are returned.
    """
    entries = sorted(distribution.items(), key=lambda entry: entry[1], reverse=True)

    return entries[:limit] if limit is not None else entries
