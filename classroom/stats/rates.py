# classroom/stats/rates.py

"""
Percentage and ratio helpers shared by every stats screen.

All helpers return a finite float. A zero denominator (or an empty collection) yields 0.0,
never NaN or an exception, since rates are rendered directly as `75.0%` style badges.
"""

from collections.abc import Iterable


def ratio(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0

    return numerator / denominator


def rate(numerator: float, denominator: float) -> float:
    """
    Expresses `numerator / denominator` as a percentage from 0 to 100.

    Args:
        numerator (float): The count being measured (e.g. present + late records).
        denominator (float): The total it is measured against.

    Returns:
        float: The percentage, or 0.0 when the denominator is zero.
    """
    return ratio(numerator, denominator) * 100


def average(values: Iterable[float]) -> float:
    values = list(values)

    return ratio(sum(values), len(values))


def round_rate(value: float, places: int = 1) -> float:
    return round(value, places)


def count_where(items: Iterable, predicate) -> int:
    return sum(1 for item in items if predicate(item))
