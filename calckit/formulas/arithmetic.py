"""Math formulas: divisors, equations, percentages and geometry."""

import cmath
import math
from typing import Optional, Union

from .helpers import fmt, round_to, safe_div
from .registry import formula
from .snapshot import Snapshot


def _whole_numbers(s: Snapshot, name: str) -> list[int]:
    """Positive whole numbers from a delimited list; everything else is dropped."""
    return [int(n) for n in s.numbers(name) if n > 0 and n == int(n)]


@formula("math.gcd", reads=("numbers",))
def greatest_common_divisor(s: Snapshot) -> Union[int, str]:
    """Greatest common divisor of a list of whole numbers."""
    numbers = _whole_numbers(s, "numbers")
    if len(numbers) < 2:
        return "Enter at least 2 whole numbers"
    return math.gcd(*numbers)


@formula("math.lcm", reads=("numbers",))
def least_common_multiple(s: Snapshot) -> Union[int, str]:
    """Least common multiple of a list of whole numbers."""
    numbers = _whole_numbers(s, "numbers")
    if len(numbers) < 2:
        return "Enter at least 2 whole numbers"
    return math.lcm(*numbers)


def _roots(s: Snapshot) -> Optional[tuple[complex, complex]]:
    a, b, c = s.number("a"), s.number("b"), s.number("c")
    if a == 0:
        return None
    root = cmath.sqrt(b * b - 4 * a * c)
    return (-b + root) / (2 * a), (-b - root) / (2 * a)


def _format_root(root: complex, decimals: int) -> Union[float, str]:
    if abs(root.imag) < 1e-12:
        return round_to(root.real, decimals)
    sign = "-" if root.imag < 0 else "+"
    return f"{fmt(root.real, decimals)} {sign} {fmt(abs(root.imag), decimals)}i"


def _root_text(root: complex, decimals: int) -> str:
    formatted = _format_root(root, decimals)
    return fmt(formatted, decimals) if isinstance(formatted, float) else formatted


@formula("math.quadratic_discriminant", reads=("a", "b", "c"))
def quadratic_discriminant(s: Snapshot, decimals: int = 4) -> float:
    """Discriminant b^2 - 4ac of ax^2 + bx + c = 0."""
    a, b, c = s.number("a"), s.number("b"), s.number("c")
    return round_to(b * b - 4 * a * c, decimals)


@formula("math.quadratic_root", reads=("a", "b", "c"))
def quadratic_root(s: Snapshot, which: int = 1, decimals: int = 4) -> Union[float, str]:
    """One root of ax^2 + bx + c = 0 (which=1 uses +sqrt, which=2 uses -sqrt)."""
    roots = _roots(s)
    if roots is None:
        return "Not a quadratic equation (a = 0)"
    return _format_root(roots[0] if which == 1 else roots[1], decimals)


@formula("math.quadratic_roots", reads=("a", "b", "c"))
def quadratic_roots(s: Snapshot, decimals: int = 4) -> str:
    """Both roots of ax^2 + bx + c = 0 as a summary string."""
    roots = _roots(s)
    if roots is None:
        return "Not a quadratic equation (a = 0)"
    first, second = (_root_text(r, decimals) for r in roots)
    if first == second:
        return f"x = {first} (repeated root)"
    return f"x1 = {first}, x2 = {second}"


@formula("math.percent_of", reads=("percent", "value"))
def percent_of(s: Snapshot, decimals: int = 4) -> float:
    """X percent of a value."""
    return round_to(s.number("percent") / 100 * s.number("value"), decimals)


@formula("math.percentage_change", reads=("initial", "final"))
def percentage_change(s: Snapshot, decimals: int = 2) -> float:
    """Percent change from an initial to a final value."""
    initial = s.number("initial")
    return round_to(safe_div(s.number("final") - initial, abs(initial)) * 100, decimals)


@formula("math.what_percent", reads=("part", "whole"))
def what_percent(s: Snapshot, decimals: int = 2) -> float:
    """What percent a part is of a whole."""
    return round_to(safe_div(s.number("part"), s.number("whole")) * 100, decimals)


@formula("math.hypotenuse", reads=("a", "b"))
def hypotenuse(s: Snapshot, decimals: int = 4) -> float:
    """Hypotenuse of a right triangle from its two legs."""
    a, b = s.number("a"), s.number("b")
    if a < 0 or b < 0:
        return 0.0
    return round_to(math.hypot(a, b), decimals)


@formula("math.missing_leg", reads=("c", "a"))
def missing_leg(s: Snapshot, decimals: int = 4) -> Union[float, str]:
    """Missing leg of a right triangle from the hypotenuse and one leg."""
    c, a = s.number("c"), s.number("a")
    if a < 0 or c < 0:
        return 0.0
    if c <= a:
        return "Hypotenuse must be longer than the leg"
    return round_to(math.sqrt(c * c - a * a), decimals)


@formula("math.circle_area", reads=("radius",))
def circle_area(s: Snapshot, decimals: int = 4) -> float:
    """Area of a circle from its radius."""
    radius = s.number("radius")
    if radius < 0:
        return 0.0
    return round_to(math.pi * radius * radius, decimals)


@formula("math.circle_circumference", reads=("radius",))
def circle_circumference(s: Snapshot, decimals: int = 4) -> float:
    """Circumference of a circle from its radius."""
    radius = s.number("radius")
    if radius < 0:
        return 0.0
    return round_to(2 * math.pi * radius, decimals)


@formula("math.rule_of_three", reads=("a", "b", "c"))
def rule_of_three(s: Snapshot, decimals: int = 4) -> float:
    """Direct proportion: a is to b as c is to x."""
    return round_to(safe_div(s.number("b") * s.number("c"), s.number("a")), decimals)


@formula("math.power", reads=("base", "exponent"))
def power(s: Snapshot, decimals: int = 6) -> Union[float, str]:
    """Base raised to an exponent."""
    base, exponent = s.number("base"), s.number("exponent")
    if base == 0 and exponent < 0:
        return "Undefined (division by zero)"
    if base < 0 and exponent != int(exponent):
        return "Undefined for a negative base with a fractional exponent"
    try:
        result = math.pow(base, exponent)
    except OverflowError:
        return "Result too large"
    return round_to(result, decimals)
