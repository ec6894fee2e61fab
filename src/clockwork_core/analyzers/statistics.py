"""Descriptive statistics helpers."""

import math
from typing import Sequence


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """Percentile of ascending-sorted values, by linear interpolation between ranks.

    This is the "R-7" definition (numpy's default ``linear`` method): the
    rank is ``p/100 * (n - 1)`` and the result interpolates between the
    neighbouring values. ``p`` outside 0-100 is not rejected.

    >>> percentile([1, 2, 3, 4, 5], 50)
    3
    >>> percentile([], 95)
    0
    """
    n = len(sorted_values)
    if n == 0:
        return 0
    if n == 1:
        return sorted_values[0]

    idx = (p / 100) * (n - 1)
    lower = math.floor(idx)
    upper = math.ceil(idx)
    weight = idx - lower

    if upper >= n:
        return sorted_values[n - 1]
    if lower < 0:
        return sorted_values[0]
    if lower == upper:
        return sorted_values[lower]

    return sorted_values[lower] * (1 - weight) + sorted_values[upper] * weight
