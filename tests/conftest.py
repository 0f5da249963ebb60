"""
Pytest configuration and shared fixtures.

Provides the loaded registries, a helper for evaluating catalogue
calculators by id, and a writer for throwaway definition directories.
"""

from pathlib import Path
from typing import Any, Callable, Optional

import pytest
import yaml

from calckit.calculators.registry import CalculatorRegistry
from calckit.calculators.schemas import CalculatorDefinition
from calckit.evaluation.evaluator import evaluate
from calckit.formulas.registry import FormulaRegistry, get_formula_registry
from calckit.formulas.snapshot import Snapshot

DEFINITIONS_DIR = Path(__file__).parent.parent / "calckit" / "calculators" / "definitions"


@pytest.fixture(scope="session")
def formula_registry() -> FormulaRegistry:
    return get_formula_registry()


@pytest.fixture(scope="session")
def calculator_registry(formula_registry) -> CalculatorRegistry:
    """Registry over the shipped definitions, loaded strictly."""
    registry = CalculatorRegistry(
        definitions_dir=DEFINITIONS_DIR,
        strict=True,
        formulas=formula_registry,
    )
    registry.load()
    return registry


@pytest.fixture
def run_calculator(calculator_registry) -> Callable[..., dict[str, Any]]:
    """Evaluate a catalogue calculator and return {output label: value}."""
    def run(calculator_id: str, values: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        calc = calculator_registry.get(calculator_id)
        assert calc is not None, f"Calculator not found: {calculator_id}"
        result = evaluate(calc, values or {})
        return {output.label: output.value for output in result.outputs}
    return run


@pytest.fixture
def compute(formula_registry) -> Callable[..., Any]:
    """Run a registered formula directly against raw values."""
    def run(name: str, values: dict[str, Any], **params: Any) -> Any:
        spec = formula_registry.get_validated(name)
        return spec.compute(Snapshot(values), params)
    return run


@pytest.fixture
def write_definition(tmp_path) -> Callable[[str, dict[str, Any]], Path]:
    """Write one definition dict as YAML into tmp_path."""
    def write(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_path / filename
        path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path
    return write


def make_definition(calculator_id: str = "sample", **overrides: Any) -> dict[str, Any]:
    """Minimal valid definition data: one number input, one output."""
    data: dict[str, Any] = {
        "id": calculator_id,
        "title": "Sample Calculator",
        "description": "Convert meters to feet.",
        "category": "conversion",
        "meta": {
            "title": "Sample",
            "description": "Sample calculator",
            "keywords": ["sample"],
        },
        "inputs": [{"id": "meters", "label": "Meters", "kind": "number", "default": 1}],
        "outputs": [{"label": "Feet", "unit": "ft", "formula": "conversion.meters_to_feet"}],
        "content": {"what_is": "<p>Meters to feet conversion.</p>"},
    }
    data.update(overrides)
    return data


def build_definition(calculator_id: str = "sample", **overrides: Any) -> CalculatorDefinition:
    return CalculatorDefinition.model_validate(make_definition(calculator_id, **overrides))
