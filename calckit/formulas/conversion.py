"""Unit and number-system conversion formulas."""

import math
import re
from typing import Optional, Union

from .helpers import round_half_up, round_to
from .registry import formula
from .snapshot import Snapshot

FOOT_IN_METERS = 0.3048
INCH_IN_METERS = 0.0254

# Factors to the base unit (meter / kilogram)
LENGTH_FACTORS: dict[str, float] = {
    "mm": 0.001,
    "cm": 0.01,
    "m": 1.0,
    "km": 1000.0,
    "in": INCH_IN_METERS,
    "ft": FOOT_IN_METERS,
    "yd": 0.9144,
    "mi": 1609.344,
}

WEIGHT_FACTORS: dict[str, float] = {
    "mg": 0.000001,
    "g": 0.001,
    "kg": 1.0,
    "t": 1000.0,
    "oz": 0.028349523125,
    "lb": 0.45359237,
    "st": 6.35029318,
}

_ROMAN_NUMERALS = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)
_ROMAN_PATTERN = re.compile(r"^M{0,3}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$")


def _convert(value: float, source: str, target: str, factors: dict[str, float]) -> float:
    if source not in factors or target not in factors:
        return 0.0
    return value * factors[source] / factors[target]


@formula("conversion.meters_to_feet", reads=("meters",))
def meters_to_feet(s: Snapshot, decimals: int = 4) -> float:
    """Meters expressed as decimal feet."""
    return round_to(s.number("meters") / FOOT_IN_METERS, decimals)


@formula("conversion.meters_to_feet_inches", reads=("meters",))
def meters_to_feet_inches(s: Snapshot) -> str:
    """Meters expressed as whole feet and rounded inches, e.g. 5' 9"."""
    meters = s.number("meters")
    total_inches = meters / INCH_IN_METERS
    if meters < 0 or not math.isfinite(total_inches):
        return ""
    feet = int(total_inches // 12)
    inches = round_half_up(total_inches - feet * 12)
    if inches == 12:
        feet += 1
        inches = 0
    return f"{feet}' {inches}\""


@formula("conversion.feet_to_meters", reads=("feet", "inches"))
def feet_to_meters(s: Snapshot, decimals: int = 4) -> float:
    """Feet plus inches expressed in meters."""
    return round_to(s.number("feet") * FOOT_IN_METERS + s.number("inches") * INCH_IN_METERS, decimals)


@formula("conversion.length", reads=("value", "from_unit", "to_unit"))
def convert_length(
    s: Snapshot,
    from_unit: Optional[str] = None,
    to_unit: Optional[str] = None,
    decimals: int = 6,
) -> float:
    """Convert a length between metric and imperial units.

    ``from_unit``/``to_unit`` params pin the pair for fixed converters;
    otherwise the units come from the calculator's select fields.
    """
    source = from_unit or s.choice("from_unit")
    target = to_unit or s.choice("to_unit")
    return round_to(_convert(s.number("value"), source, target, LENGTH_FACTORS), decimals)


@formula("conversion.weight", reads=("value", "from_unit", "to_unit"))
def convert_weight(
    s: Snapshot,
    from_unit: Optional[str] = None,
    to_unit: Optional[str] = None,
    decimals: int = 6,
) -> float:
    """Convert a mass between metric and imperial units."""
    source = from_unit or s.choice("from_unit")
    target = to_unit or s.choice("to_unit")
    return round_to(_convert(s.number("value"), source, target, WEIGHT_FACTORS), decimals)


def _to_celsius(value: float, unit: str) -> float:
    if unit == "f":
        return (value - 32) * 5 / 9
    if unit == "k":
        return value - 273.15
    return value


def _from_celsius(value: float, unit: str) -> float:
    if unit == "f":
        return value * 9 / 5 + 32
    if unit == "k":
        return value + 273.15
    return value


@formula("conversion.temperature", reads=("value", "from_unit", "to_unit"))
def convert_temperature(
    s: Snapshot,
    from_unit: Optional[str] = None,
    to_unit: Optional[str] = None,
    decimals: int = 2,
) -> float:
    """Convert a temperature between Celsius, Fahrenheit and Kelvin."""
    source = from_unit or s.choice("from_unit", "c")
    target = to_unit or s.choice("to_unit", "f")
    if source not in ("c", "f", "k") or target not in ("c", "f", "k"):
        return 0.0
    return round_to(_from_celsius(_to_celsius(s.number("value"), source), target), decimals)


@formula("conversion.decimal_to_binary", reads=("decimal",))
def decimal_to_binary(s: Snapshot) -> str:
    """Whole part of a decimal number written in base 2."""
    value = s.number_or_none("decimal")
    if value is None:
        return ""
    whole = int(value)
    return f"-{bin(-whole)[2:]}" if whole < 0 else bin(whole)[2:]


@formula("conversion.binary_to_decimal", reads=("binary",))
def binary_to_decimal(s: Snapshot) -> Union[int, str]:
    """Base-2 digits read as a decimal integer."""
    text = s.text("binary").replace(" ", "")
    if not text:
        return ""
    negative = text.startswith("-")
    digits = text[1:] if negative else text
    if not digits or set(digits) - {"0", "1"}:
        return "Invalid binary number"
    if len(digits) > 64:
        return "Binary number too long (max 64 digits)"
    value = int(digits, 2)
    return -value if negative else value


@formula("conversion.decimal_to_roman", reads=("decimal",))
def decimal_to_roman(s: Snapshot) -> str:
    """Integer written as a Roman numeral (1 to 3999)."""
    value = s.number_or_none("decimal")
    if value is None or value != int(value) or not 1 <= value <= 3999:
        return "Enter a whole number between 1 and 3999"
    remaining = int(value)
    parts: list[str] = []
    for amount, symbol in _ROMAN_NUMERALS:
        count, remaining = divmod(remaining, amount)
        parts.append(symbol * count)
    return "".join(parts)


@formula("conversion.roman_to_decimal", reads=("roman",))
def roman_to_decimal(s: Snapshot) -> Union[int, str]:
    """Roman numeral read as a decimal integer."""
    text = s.text("roman").upper()
    if not text:
        return ""
    if not _ROMAN_PATTERN.match(text):
        return "Invalid Roman numeral"
    values = {symbol: amount for amount, symbol in _ROMAN_NUMERALS if len(symbol) == 1}
    total = 0
    for i, char in enumerate(text):
        current = values[char]
        following = values[text[i + 1]] if i + 1 < len(text) else 0
        total += -current if current < following else current
    return total
