"""Formula registry - collects the named output computations.

Formula modules declare their functions with the ``@formula`` decorator.
The registry imports those modules once and serves the resulting specs.
"""

import importlib
import inspect
import logging
from typing import Callable, Optional

from calckit.errors import UnknownFormulaError

from .schemas import FormulaResult, FormulaSpec, FormulaSummary

logger = logging.getLogger(__name__)

FORMULA_MODULES = (
    "calckit.formulas.conversion",
    "calckit.formulas.arithmetic",
    "calckit.formulas.stats",
    "calckit.formulas.health",
    "calckit.formulas.finance",
    "calckit.formulas.physics",
    "calckit.formulas.dates",
    "calckit.formulas.generators",
)

# Populated at import time by @formula
_DECLARED: dict[str, FormulaSpec] = {}


def formula(
    name: str,
    reads: tuple[str, ...],
    gated: tuple[str, ...] = (),
    deterministic: bool = True,
) -> Callable[[Callable[..., FormulaResult]], Callable[..., FormulaResult]]:
    """Register a function as a named formula.

    The first positional parameter receives the Snapshot; every further
    parameter is a keyword an OutputField may set through ``params``.
    """
    def decorator(func: Callable[..., FormulaResult]) -> Callable[..., FormulaResult]:
        if name in _DECLARED:
            raise ValueError(f"Formula already registered: {name}")
        unknown_gated = set(gated) - set(reads)
        if unknown_gated:
            raise ValueError(f"Formula {name} gates keys it does not read: {sorted(unknown_gated)}")
        parameters = list(inspect.signature(func).parameters.values())[1:]
        doc = inspect.getdoc(func) or ""
        _DECLARED[name] = FormulaSpec(
            name=name,
            func=func,
            reads=tuple(reads),
            gated=tuple(gated),
            deterministic=deterministic,
            description=doc.splitlines()[0] if doc else "",
            params=tuple(p.name for p in parameters),
        )
        return func
    return decorator


class FormulaRegistry:
    """Registry of formulas declared in the formula modules."""

    def __init__(self, modules: tuple[str, ...] = FORMULA_MODULES):
        self.modules = modules
        self._formulas: dict[str, FormulaSpec] = {}
        self._loaded = False

    def load(self) -> None:
        """Import every formula module and collect its declarations."""
        if self._loaded:
            return

        for module_name in self.modules:
            importlib.import_module(module_name)
            logger.debug(f"Imported formula module: {module_name}")

        self._formulas = dict(_DECLARED)
        self._loaded = True
        logger.info(f"Loaded {len(self._formulas)} formulas")

    def get(self, name: str) -> Optional[FormulaSpec]:
        """Get formula by name."""
        self.load()
        return self._formulas.get(name)

    def get_validated(self, name: str) -> FormulaSpec:
        """Get formula by name, raising if not registered."""
        spec = self.get(name)
        if spec is None:
            raise UnknownFormulaError(f"Formula not found: {name}")
        return spec

    def list_all(self) -> list[FormulaSpec]:
        self.load()
        return sorted(self._formulas.values(), key=lambda s: s.name)

    def list_summaries(self, category: Optional[str] = None) -> list[FormulaSummary]:
        """List formula summaries, optionally for one category."""
        return [
            FormulaSummary(
                name=spec.name,
                category=spec.category,
                description=spec.description,
                reads=list(spec.reads),
                gated=list(spec.gated),
                params=list(spec.params),
                deterministic=spec.deterministic,
            )
            for spec in self.list_all()
            if category is None or spec.category == category
        ]

    def list_nondeterministic(self) -> list[str]:
        """Names of formulas that must never be cached or deduplicated."""
        return [spec.name for spec in self.list_all() if not spec.deterministic]

    def count(self) -> int:
        self.load()
        return len(self._formulas)


# Global registry instance
_registry: Optional[FormulaRegistry] = None


def get_formula_registry() -> FormulaRegistry:
    """Get the global formula registry instance."""
    global _registry
    if _registry is None:
        _registry = FormulaRegistry()
        _registry.load()
    return _registry
