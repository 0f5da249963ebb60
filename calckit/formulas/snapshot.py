"""Typed, read-only view over a coerced input snapshot.

Formulas never index the raw mapping directly. They ask for a value of
the kind they expect and get a usable default when coercion failed.
"""

import datetime
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

from calckit.fields.coercion import (
    MISSING,
    Sentinel,
    is_sentinel,
    parse_number_list,
    to_date,
    to_flag,
    to_number,
    to_text,
    to_time,
)


class Snapshot(Mapping[str, Any]):
    """Immutable mapping of input id to coerced value.

    ``bind`` renames the keys a formula asks for onto the calculator's
    own input ids, so one formula can serve calculators that name their
    fields differently.
    """

    def __init__(
        self,
        values: Mapping[str, Any],
        bind: Optional[Mapping[str, str]] = None,
    ):
        self._values = MappingProxyType(dict(values))
        self._bind = dict(bind or {})

    def bound(self, bind: Mapping[str, str]) -> "Snapshot":
        """Return a view whose lookups go through ``bind`` first."""
        snapshot = Snapshot.__new__(Snapshot)
        snapshot._values = self._values
        snapshot._bind = {**self._bind, **bind}
        return snapshot

    def _key(self, name: str) -> str:
        return self._bind.get(name, name)

    def __getitem__(self, name: str) -> Any:
        return self._values[self._key(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Snapshot({dict(self._values)!r})"

    def raw(self, name: str) -> Any:
        """Stored value, or MISSING when the id is absent."""
        return self._values.get(self._key(name), MISSING)

    # Typed accessors

    def number(self, name: str, default: float = 0.0) -> float:
        value = to_number(self.raw(name))
        return default if is_sentinel(value) else value

    def number_or_none(self, name: str) -> Optional[float]:
        value = to_number(self.raw(name))
        return None if is_sentinel(value) else value

    def integer(self, name: str, default: int = 0) -> int:
        value = self.number_or_none(name)
        return default if value is None else int(value)

    def text(self, name: str) -> str:
        return to_text(self.raw(name)).strip()

    def choice(self, name: str, default: str = "") -> str:
        return self.text(name) or default

    def flag(self, name: str) -> bool:
        return to_flag(self.raw(name))

    def date(self, name: str) -> Union[datetime.date, Sentinel]:
        return to_date(self.raw(name))

    def time(self, name: str) -> Union[datetime.time, Sentinel]:
        return to_time(self.raw(name))

    def numbers(self, name: str) -> list[float]:
        return parse_number_list(self.raw(name))
