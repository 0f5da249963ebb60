"""Formula schemas.

A formula is a named, pure function from a Snapshot to a displayed value.
FormulaSpec holds the callable together with the metadata the loader uses
for static checks: which snapshot keys it reads, which of those it knows
may be hidden, and whether it is deterministic.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel, Field

from .snapshot import Snapshot

FormulaResult = Union[int, float, str]


@dataclass(frozen=True)
class FormulaSpec:
    """A registered output computation."""

    name: str
    func: Callable[..., FormulaResult]
    reads: tuple[str, ...]
    gated: tuple[str, ...] = ()
    deterministic: bool = True
    description: str = ""
    params: tuple[str, ...] = field(default_factory=tuple)

    @property
    def category(self) -> str:
        return self.name.split(".", 1)[0]

    def compute(
        self,
        snapshot: Snapshot,
        params: Optional[Mapping[str, Any]] = None,
    ) -> FormulaResult:
        return self.func(snapshot, **dict(params or {}))


class FormulaSummary(BaseModel):
    """Formula info for list endpoints."""
    name: str = Field(..., description="Registered formula name (category.name)")
    category: str = Field(..., description="Formula module category")
    description: str = Field("", description="First line of the formula docstring")
    reads: list[str] = Field(default_factory=list, description="Snapshot keys the formula reads")
    gated: list[str] = Field(default_factory=list, description="Keys the formula only reads behind its own visibility check")
    params: list[str] = Field(default_factory=list, description="Keyword parameters an output may set")
    deterministic: bool = Field(True, description="False for random generators and clock-dependent formulas")
