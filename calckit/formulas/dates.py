"""Date and time formulas.

Every formula checks for the invalid-date/time sentinel before doing any
arithmetic and answers with an empty result when it finds one.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Union

from calckit.fields.coercion import is_sentinel

from .helpers import round_to
from .registry import formula
from .snapshot import Snapshot

# Average lengths used for whole-unit differences
_UNIT_DAYS = {
    "days": 1.0,
    "weeks": 7.0,
    "months": 30.437,
    "years": 365.25,
}


@formula("dates.difference", reads=("start_date", "end_date"))
def date_difference(s: Snapshot, unit: str = "days") -> Union[int, str]:
    """Whole days (or weeks, months, years) between two dates."""
    start, end = s.date("start_date"), s.date("end_date")
    if is_sentinel(start) or is_sentinel(end):
        return ""
    days = abs((end - start).days)
    return int(days // _UNIT_DAYS.get(unit, 1.0))


@formula("dates.add_days", reads=("start_date", "days", "operation"))
def add_days(s: Snapshot) -> str:
    """Date reached by adding or subtracting a number of days."""
    start = s.date("start_date")
    if is_sentinel(start):
        return ""
    days = s.integer("days")
    if s.choice("operation", "add") == "subtract":
        days = -days
    try:
        return (start + timedelta(days=days)).isoformat()
    except OverflowError:
        return "Date out of range"


@formula("dates.day_of_week", reads=("date",))
def day_of_week(s: Snapshot) -> str:
    """Weekday name of a date."""
    value = s.date("date")
    if is_sentinel(value):
        return ""
    return calendar.day_name[value.weekday()]


def _age_parts(birth: date, on: date) -> tuple[int, int, int]:
    years = on.year - birth.year
    months = on.month - birth.month
    days = on.day - birth.day
    if days < 0:
        months -= 1
        previous_month = 12 if on.month == 1 else on.month - 1
        previous_year = on.year - 1 if on.month == 1 else on.year
        days += calendar.monthrange(previous_year, previous_month)[1]
    if months < 0:
        years -= 1
        months += 12
    return years, months, days


@formula("dates.age", reads=("birth_date", "on_date"), deterministic=False)
def age(s: Snapshot) -> str:
    """Exact age in years, months and days.

    Falls back to today's date when no reference date is entered, so the
    result depends on the clock.
    """
    birth = s.date("birth_date")
    if is_sentinel(birth):
        return ""
    on = s.date("on_date")
    if is_sentinel(on):
        on = date.today()
    if birth > on:
        return "Birth date must be before the reference date"
    years, months, days = _age_parts(birth, on)
    return f"{years} years, {months} months, {days} days"


@formula("dates.hours_worked", reads=("start_time", "end_time", "break_minutes"))
def hours_worked(s: Snapshot, decimals: int = 2) -> float:
    """Decimal hours between two clock times minus a break; overnight shifts wrap."""
    start, end = s.time("start_time"), s.time("end_time")
    if is_sentinel(start) or is_sentinel(end):
        return 0.0
    anchor = date(2000, 1, 1)
    elapsed = datetime.combine(anchor, end) - datetime.combine(anchor, start)
    if elapsed < timedelta(0):
        elapsed += timedelta(days=1)
    minutes = elapsed.total_seconds() / 60 - max(s.number("break_minutes"), 0.0)
    return round_to(max(minutes, 0.0) / 60, decimals)
