"""Formulas module - the named output computations.

Each formula is a pure function from a Snapshot to a number or string,
registered under a dotted name (``category.name``) with the snapshot keys
it reads. Calculator definitions reference formulas by that name.
"""

from .registry import FormulaRegistry, formula, get_formula_registry
from .schemas import FormulaResult, FormulaSpec, FormulaSummary
from .snapshot import Snapshot

__all__ = [
    "FormulaRegistry",
    "FormulaResult",
    "FormulaSpec",
    "FormulaSummary",
    "Snapshot",
    "formula",
    "get_formula_registry",
]
