"""Rounding and formatting shared by formula modules."""

import math

# Whole numbers from here up are written in exponent form
EXPONENT_THRESHOLD = 1e15


def round_to(value: float, decimals: int = 2) -> float:
    """Round to fixed decimals; non-finite input becomes 0."""
    if not math.isfinite(value):
        return 0.0
    rounded = round(value, decimals)
    # avoid displaying -0
    return 0.0 if rounded == 0 else rounded


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, as displays expect."""
    if not math.isfinite(value):
        return 0
    return math.floor(value + 0.5)


def fmt(value: float, decimals: int = 4) -> str:
    """Format a number for embedding in a string result."""
    rounded = round_to(value, decimals)
    if abs(rounded) >= EXPONENT_THRESHOLD:
        return f"{rounded:g}"
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.{decimals}f}".rstrip("0").rstrip(".")


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    if denominator == 0:
        return default
    return numerator / denominator
