"""Health formulas: BMI, basal metabolic rate, body fat."""

import math
from typing import Optional

from .helpers import fmt, round_to
from .registry import formula
from .snapshot import Snapshot

# (upper bound, label); the last band is open-ended
BMI_CATEGORIES = (
    (18.5, "Underweight"),
    (25.0, "Normal Weight"),
    (30.0, "Overweight"),
    (35.0, "Obese"),
    (math.inf, "Severely Obese"),
)

ACTIVITY_FACTORS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

_BMI_READS = ("unit_system", "weight", "height", "weight_lb", "height_ft", "height_in")
# Each unit system hides the other's fields; the formula checks unit_system itself.
_BMI_GATED = ("weight", "height", "weight_lb", "height_ft", "height_in")


def _bmi_value(s: Snapshot) -> Optional[float]:
    if s.choice("unit_system", "metric") == "imperial":
        pounds = s.number("weight_lb")
        inches = s.number("height_ft") * 12 + s.number("height_in")
        if pounds <= 0 or inches <= 0:
            return None
        return pounds * 703 / (inches * inches)
    kilograms = s.number("weight")
    meters = s.number("height") / 100
    if kilograms <= 0 or meters <= 0:
        return None
    return kilograms / (meters * meters)


def bmi_category(value: float) -> str:
    for upper, label in BMI_CATEGORIES:
        if value < upper:
            return label
    return BMI_CATEGORIES[-1][1]


@formula("health.bmi", reads=_BMI_READS, gated=_BMI_GATED)
def bmi(s: Snapshot, decimals: int = 1) -> float:
    """Body mass index in metric (kg, cm) or imperial (lb, ft/in) units."""
    value = _bmi_value(s)
    return 0.0 if value is None else round_to(value, decimals)


@formula("health.bmi_category", reads=_BMI_READS, gated=_BMI_GATED)
def bmi_category_label(s: Snapshot) -> str:
    """WHO weight category for the computed BMI."""
    value = _bmi_value(s)
    if value is None:
        return ""
    # classify the displayed value so 24.96 shows 25.0 and "Overweight"
    return bmi_category(round_to(value, 1))


@formula("health.healthy_weight_range", reads=_BMI_READS, gated=_BMI_GATED)
def healthy_weight_range(s: Snapshot) -> str:
    """Weight range giving a BMI between 18.5 and 24.9 for the entered height."""
    if s.choice("unit_system", "metric") == "imperial":
        inches = s.number("height_ft") * 12 + s.number("height_in")
        if inches <= 0:
            return ""
        low, high = 18.5 * inches * inches / 703, 24.9 * inches * inches / 703
        return f"{fmt(low, 1)} - {fmt(high, 1)} lb"
    meters = s.number("height") / 100
    if meters <= 0:
        return ""
    low, high = 18.5 * meters * meters, 24.9 * meters * meters
    return f"{fmt(low, 1)} - {fmt(high, 1)} kg"


def _bmr(s: Snapshot) -> Optional[float]:
    weight, height, age = s.number("weight"), s.number("height"), s.number("age")
    if weight <= 0 or height <= 0 or age <= 0:
        return None
    base = 10 * weight + 6.25 * height - 5 * age
    return base + 5 if s.choice("sex", "male") == "male" else base - 161


@formula("health.bmr", reads=("sex", "weight", "height", "age"))
def basal_metabolic_rate(s: Snapshot) -> float:
    """Basal metabolic rate in kcal/day (Mifflin-St Jeor)."""
    value = _bmr(s)
    return 0.0 if value is None else round_to(value, 0)


@formula("health.daily_calories", reads=("sex", "weight", "height", "age", "activity"))
def daily_calories(s: Snapshot) -> float:
    """Daily energy need: BMR times the activity factor."""
    value = _bmr(s)
    if value is None:
        return 0.0
    factor = ACTIVITY_FACTORS.get(s.choice("activity"), ACTIVITY_FACTORS["sedentary"])
    return round_to(value * factor, 0)


@formula("health.body_fat_navy", reads=("sex", "height", "neck", "waist", "hip"), gated=("hip",))
def body_fat_navy(s: Snapshot, decimals: int = 1) -> float:
    """Body fat percentage by the U.S. Navy circumference method (cm)."""
    height, neck, waist = s.number("height"), s.number("neck"), s.number("waist")
    if height <= 0 or neck <= 0 or waist <= 0:
        return 0.0
    if s.choice("sex", "male") == "female":
        hip = s.number("hip")
        girth = waist + hip - neck
        if hip <= 0 or girth <= 0:
            return 0.0
        density = 1.29579 - 0.35004 * math.log10(girth) + 0.22100 * math.log10(height)
    else:
        girth = waist - neck
        if girth <= 0:
            return 0.0
        density = 1.0324 - 0.19077 * math.log10(girth) + 0.15456 * math.log10(height)
    if density <= 0:
        return 0.0
    return round_to(max(495 / density - 450, 0.0), decimals)
