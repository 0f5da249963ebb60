"""Descriptive statistics over delimited number lists.

Lists may hold values near the float limit; a result that cannot be
represented as a float becomes 0, like any other non-finite result.
"""

import math
import statistics
from collections import Counter
from typing import Union

from .helpers import fmt, round_to, safe_div
from .registry import formula
from .snapshot import Snapshot


def _mean(numbers: list[float]) -> float:
    try:
        return math.fsum(numbers) / len(numbers)
    except OverflowError:
        # the sum overflows but the mean never exceeds the largest value
        return math.fsum(n / len(numbers) for n in numbers)


@formula("statistics.mean", reads=("numbers",))
def mean(s: Snapshot, decimals: int = 4) -> float:
    """Arithmetic mean of a number list."""
    numbers = s.numbers("numbers")
    if not numbers:
        return 0.0
    return round_to(_mean(numbers), decimals)


@formula("statistics.median", reads=("numbers",))
def median(s: Snapshot, decimals: int = 4) -> float:
    """Median of a number list."""
    numbers = sorted(s.numbers("numbers"))
    if not numbers:
        return 0.0
    middle = len(numbers) // 2
    if len(numbers) % 2:
        return round_to(numbers[middle], decimals)
    return round_to(numbers[middle - 1] / 2 + numbers[middle] / 2, decimals)


@formula("statistics.mode", reads=("numbers",))
def mode(s: Snapshot, decimals: int = 4) -> str:
    """Most frequent value(s) of a number list."""
    numbers = s.numbers("numbers")
    if not numbers:
        return ""
    counts = Counter(numbers)
    highest = max(counts.values())
    if highest == 1:
        return "No mode"
    return ", ".join(fmt(n, decimals) for n in sorted(n for n, c in counts.items() if c == highest))


@formula("statistics.range", reads=("numbers",))
def value_range(s: Snapshot, decimals: int = 4) -> float:
    """Difference between the largest and smallest value."""
    numbers = s.numbers("numbers")
    if not numbers:
        return 0.0
    return round_to(max(numbers) - min(numbers), decimals)


@formula("statistics.count", reads=("numbers",))
def count(s: Snapshot) -> int:
    """How many numbers were entered."""
    return len(s.numbers("numbers"))


@formula("statistics.sum", reads=("numbers",))
def total(s: Snapshot, decimals: int = 4) -> float:
    """Sum of a number list."""
    try:
        return round_to(math.fsum(s.numbers("numbers")), decimals)
    except OverflowError:
        return 0.0


@formula("statistics.variance", reads=("numbers",))
def variance(s: Snapshot, sample: bool = False, decimals: int = 4) -> Union[float, str]:
    """Population variance (or sample variance when sample=True)."""
    numbers = s.numbers("numbers")
    if len(numbers) < (2 if sample else 1):
        return "Enter at least 2 values" if sample else 0.0
    try:
        result = statistics.variance(numbers) if sample else statistics.pvariance(numbers)
    except OverflowError:
        return 0.0
    return round_to(result, decimals)


@formula("statistics.standard_deviation", reads=("numbers",))
def standard_deviation(s: Snapshot, sample: bool = False, decimals: int = 4) -> Union[float, str]:
    """Population standard deviation (or sample when sample=True)."""
    numbers = s.numbers("numbers")
    if len(numbers) < (2 if sample else 1):
        return "Enter at least 2 values" if sample else 0.0
    deviation = statistics.stdev if sample else statistics.pstdev
    try:
        result = deviation(numbers)
    except OverflowError:
        # the variance overflows; scale the values down and the deviation back up
        scale = max(abs(n) for n in numbers)
        result = deviation([n / scale for n in numbers]) * scale
    return round_to(result, decimals)


@formula("statistics.weighted_average", reads=("values", "weights"))
def weighted_average(s: Snapshot, decimals: int = 4) -> Union[float, str]:
    """Average of values weighted by a parallel list of weights."""
    values = s.numbers("values")
    weights = s.numbers("weights")
    if not values:
        return 0.0
    if len(values) != len(weights):
        return "Values and weights must have the same count"
    try:
        weighted = math.fsum(v * w for v, w in zip(values, weights))
        weight_total = math.fsum(weights)
    except (OverflowError, ValueError):
        # ValueError is fsum's answer to inf + -inf among the products
        return 0.0
    return round_to(safe_div(weighted, weight_total), decimals)


@formula("statistics.z_score", reads=("value", "mean", "std_dev"))
def z_score(s: Snapshot, decimals: int = 4) -> float:
    """Standard score of a value given the mean and standard deviation."""
    std_dev = s.number("std_dev")
    if std_dev <= 0:
        return 0.0
    return round_to((s.number("value") - s.number("mean")) / std_dev, decimals)
