"""Value coercion - turns raw form values into typed snapshot values.

Coercion never raises. A value that cannot be read as its declared kind
becomes a Sentinel; formulas decide how to react to it.
"""

import math
import re
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Union

from .schemas import FieldKind

_TRUE_STRINGS = {"true", "1", "yes", "on", "checked"}
_LIST_SEPARATORS = re.compile(r"[,;\s]+")


class Sentinel(Enum):
    """Placeholders for values that could not be coerced."""
    MISSING = "missing"
    INVALID_DATE = "invalid_date"
    INVALID_TIME = "invalid_time"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"<{self.name}>"


MISSING = Sentinel.MISSING
INVALID_DATE = Sentinel.INVALID_DATE
INVALID_TIME = Sentinel.INVALID_TIME

CoercedValue = Union[float, str, bool, date, time, Sentinel]


def is_sentinel(value: Any) -> bool:
    return isinstance(value, Sentinel)


def to_number(raw: Any) -> Union[float, Sentinel]:
    """Parse a raw value as a finite float, or MISSING."""
    if raw is None or isinstance(raw, Sentinel):
        return MISSING
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, (int, float)):
        try:
            number = float(raw)
        except OverflowError:
            return MISSING
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return MISSING
        try:
            number = float(text)
        except ValueError:
            return MISSING
    else:
        return MISSING
    if math.isnan(number) or math.isinf(number):
        return MISSING
    return number


def to_text(raw: Any) -> str:
    if raw is None or isinstance(raw, Sentinel):
        return ""
    return str(raw)


def to_flag(raw: Any) -> bool:
    """Coerce checkbox values to a strict bool."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0 and not (isinstance(raw, float) and math.isnan(raw))
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUE_STRINGS
    return False


def to_date(raw: Any) -> Union[date, Sentinel]:
    """Parse a calendar date on the local calendar.

    Plain ``YYYY-MM-DD`` strings are calendar dates and are never shifted
    through UTC. Timezone-aware datetimes are converted to local time first.
    """
    if isinstance(raw, datetime):
        return _local_date(raw)
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return INVALID_DATE
    text = raw.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return _local_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        return INVALID_DATE


def _local_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.date()


def to_time(raw: Any) -> Union[time, Sentinel]:
    """Parse a clock time such as ``08:30`` or ``17:45:10``.

    Clock times are wall-clock readings: a UTC offset is dropped, never applied.
    """
    if isinstance(raw, datetime):
        return raw.time()
    if isinstance(raw, time):
        return raw.replace(tzinfo=None)
    if not isinstance(raw, str) or not raw.strip():
        return INVALID_TIME
    try:
        return time.fromisoformat(raw.strip()).replace(tzinfo=None)
    except ValueError:
        return INVALID_TIME


def coerce(raw: Any, kind: FieldKind) -> CoercedValue:
    """Coerce a raw value to the form its declared kind requires."""
    if kind == FieldKind.NUMBER:
        return to_number(raw)
    if kind == FieldKind.CHECKBOX:
        return to_flag(raw)
    if kind == FieldKind.DATE:
        return to_date(raw)
    if kind == FieldKind.TIME:
        return to_time(raw)
    # text and select pass through
    return to_text(raw)


def parse_number_list(text: Any) -> list[float]:
    """Split a delimited list of numbers, discarding tokens that do not parse."""
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = to_number(text)
        return [] if is_sentinel(value) else [value]
    numbers: list[float] = []
    for token in _LIST_SEPARATORS.split(to_text(text)):
        value = to_number(token)
        if not is_sentinel(value):
            numbers.append(value)
    return numbers
