"""Calculator registry - loads and serves calculator definitions from YAML files."""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Optional

import yaml

from calckit.errors import CalculatorDefinitionError, DuplicateCalculatorError
from calckit.formulas.registry import FormulaRegistry, get_formula_registry

from .schemas import CalculatorCategory, CalculatorDefinition, CalculatorSummary
from .validation import ValidationReport, validate_definition

logger = logging.getLogger(__name__)


def load_definition_file(path: Path) -> CalculatorDefinition:
    """Parse and schema-validate one YAML definition file."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return CalculatorDefinition.model_validate(data)


class DuplicatePolicy(str, Enum):
    """What to do when two files declare the same calculator id."""

    REJECT = "reject"          # raise DuplicateCalculatorError at load time
    LAST_WINS = "last_wins"    # keep the later file (sorted path order), log a warning


class CalculatorRegistry:
    """Registry of calculator definitions loaded from YAML files.

    Calculators are loaded from calckit/calculators/definitions/*.yaml,
    one CalculatorDefinition per file, in sorted path order. Malformed or
    invalid definitions are logged and skipped unless ``strict`` is set.
    The registry is read-only once loaded.
    """

    def __init__(
        self,
        definitions_dir: Optional[Path] = None,
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.REJECT,
        strict: bool = False,
        formulas: Optional[FormulaRegistry] = None,
    ):
        if definitions_dir is None:
            definitions_dir = Path(__file__).parent / "definitions"
        self.definitions_dir = definitions_dir
        self.duplicate_policy = DuplicatePolicy(duplicate_policy)
        self.strict = strict
        self._formulas = formulas
        self._calculators: dict[str, CalculatorDefinition] = {}
        self._sources: dict[str, Path] = {}
        self.report = ValidationReport()
        self._loaded = False

    def load(self) -> None:
        """Load all calculator definitions from YAML files."""
        if self._loaded:
            return

        if not self.definitions_dir.exists():
            logger.warning(f"Definitions directory not found: {self.definitions_dir}")
            self._loaded = True
            return

        formulas = self._formulas or get_formula_registry()
        for yaml_file in sorted(self.definitions_dir.glob("*.yaml")):
            try:
                calc = load_definition_file(yaml_file)
            except Exception as e:
                if self.strict:
                    raise
                logger.error(f"Failed to load calculator from {yaml_file}: {e}")
                continue

            if yaml_file.stem != calc.id:
                logger.warning(f"File name {yaml_file.name} does not match calculator id '{calc.id}'")
            report = validate_definition(calc, formulas)
            self.report.extend(report)
            for issue in report.warnings:
                logger.debug(f"{yaml_file.name}: {issue.message}")
            if not report.ok:
                messages = "; ".join(issue.message for issue in report.errors)
                if self.strict:
                    raise CalculatorDefinitionError(f"Invalid calculator in {yaml_file}: {messages}")
                logger.error(f"Skipping invalid calculator {calc.id} from {yaml_file}: {messages}")
                continue

            self._register(calc, yaml_file)

        self._loaded = True
        logger.info(f"Loaded {len(self._calculators)} calculators")

    def _register(self, calc: CalculatorDefinition, source: Path) -> None:
        existing = self._sources.get(calc.id)
        if existing is not None:
            if self.duplicate_policy == DuplicatePolicy.REJECT:
                raise DuplicateCalculatorError(calc.id, str(existing), str(source))
            logger.warning(
                f"Duplicate calculator id '{calc.id}': {source} replaces {existing}"
            )
        self._calculators[calc.id] = calc
        self._sources[calc.id] = source
        logger.debug(f"Loaded calculator: {calc.id}")

    def get(self, calculator_id: str) -> Optional[CalculatorDefinition]:
        """Get calculator definition by id; None when unknown."""
        self.load()
        return self._calculators.get(calculator_id)

    def get_source(self, calculator_id: str) -> Optional[Path]:
        """File a calculator was loaded from."""
        self.load()
        return self._sources.get(calculator_id)

    def list_all(self, category: Optional[CalculatorCategory] = None) -> list[CalculatorDefinition]:
        """List calculator definitions, optionally for one category."""
        self.load()
        return [
            c for c in self._calculators.values()
            if category is None or c.category == category
        ]

    def list_summaries(self, category: Optional[CalculatorCategory] = None) -> list[CalculatorSummary]:
        """List lightweight calculator summaries."""
        return [summarize(c) for c in self.list_all(category)]

    def list_categories(self) -> dict[str, int]:
        """Calculator counts per category."""
        self.load()
        counts: dict[str, int] = {}
        for calc in self._calculators.values():
            cat = calc.category.value
            counts[cat] = counts.get(cat, 0) + 1
        return counts

    def list_ids(self) -> list[str]:
        self.load()
        return sorted(self._calculators)

    def search(self, query: str) -> list[CalculatorDefinition]:
        """Search calculators by id, title, description, or keywords."""
        self.load()
        query_lower = query.lower()
        return [
            c for c in self._calculators.values()
            if query_lower in c.id.lower()
            or query_lower in c.title.lower()
            or query_lower in c.description.lower()
            or (c.meta is not None and any(query_lower in kw.lower() for kw in c.meta.keywords))
        ]

    def related(self, calculator_id: str, limit: int = 3) -> list[CalculatorDefinition]:
        """Other calculators in the same category, in catalogue order.

        Returns an empty list for an unknown id.
        """
        calc = self.get(calculator_id)
        if calc is None:
            return []
        siblings = [c for c in self.list_all(calc.category) if c.id != calculator_id]
        return siblings[:max(limit, 0)]

    def count(self) -> int:
        """Get total number of calculators."""
        self.load()
        return len(self._calculators)


def summarize(calc: CalculatorDefinition) -> CalculatorSummary:
    return CalculatorSummary(
        id=calc.id,
        title=calc.title,
        description=calc.description,
        category=calc.category,
        icon=calc.icon,
        input_count=len(calc.inputs),
        output_count=len(calc.outputs),
    )


# Global registry instance
_registry: Optional[CalculatorRegistry] = None


def get_calculator_registry() -> CalculatorRegistry:
    """Get the global calculator registry instance.

    Reads CALCKIT_DEFINITIONS_DIR, CALCKIT_DUPLICATE_POLICY and
    CALCKIT_STRICT from the environment on first use.
    """
    global _registry
    if _registry is None:
        definitions_dir = os.environ.get("CALCKIT_DEFINITIONS_DIR")
        _registry = CalculatorRegistry(
            definitions_dir=Path(definitions_dir) if definitions_dir else None,
            duplicate_policy=DuplicatePolicy(
                os.environ.get("CALCKIT_DUPLICATE_POLICY", DuplicatePolicy.REJECT.value)
            ),
            strict=os.environ.get("CALCKIT_STRICT", "").lower() in ("1", "true", "yes"),
        )
        _registry.load()
    return _registry
