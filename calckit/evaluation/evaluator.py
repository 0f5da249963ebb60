"""Evaluator - runs a calculator's outputs against raw user input.

This is the consumer loop: raw values are coerced once into a Snapshot
with one entry per declared input, then every output formula runs in
declared order. No state is kept between evaluations.
"""

import logging
import math
from typing import Any, Mapping, Optional

from calckit.calculators.schemas import CalculatorDefinition, OutputField
from calckit.fields.coercion import coerce
from calckit.fields.conditions import hidden_field_ids, visible_fields
from calckit.formulas.helpers import fmt
from calckit.formulas.registry import FormulaRegistry, get_formula_registry
from calckit.formulas.schemas import FormulaResult
from calckit.formulas.snapshot import Snapshot

from .schemas import EvaluationResult, OutputResult

logger = logging.getLogger(__name__)

# Shown when a formula fails unexpectedly
FAILED_DISPLAY = "-"
DISPLAY_DECIMALS = 4


def build_snapshot(
    definition: CalculatorDefinition,
    raw_values: Optional[Mapping[str, Any]] = None,
) -> Snapshot:
    """Coerce raw values into a snapshot holding every declared input.

    Untouched fields take their declared default. Keys that are not
    declared inputs are ignored. Hidden fields keep their values.
    """
    raw_values = raw_values or {}
    values: dict[str, Any] = {}
    for field in definition.inputs:
        raw = raw_values[field.id] if field.id in raw_values else field.default
        values[field.id] = coerce(raw, field.kind)
    return Snapshot(values)


def format_value(value: Any) -> str:
    """Display form of a formula result: at most 4 decimals, no trailing zeros."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        # exact, and may be too large to convert to a float
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return FAILED_DISPLAY
        return fmt(value, DISPLAY_DECIMALS)
    return str(value)


def _display(text: str, unit: Optional[str]) -> str:
    if unit and text not in ("", FAILED_DISPLAY):
        return f"{text} {unit}"
    return text


def evaluate_output(
    definition: CalculatorDefinition,
    output: OutputField,
    snapshot: Snapshot,
    formulas: FormulaRegistry,
) -> OutputResult:
    """Run one output formula; failures are logged and shown as '-'."""
    spec = formulas.get(output.formula)
    deterministic = spec.deterministic if spec is not None else True
    value: FormulaResult
    if spec is None:
        logger.error(f"Calculator {definition.id}: unknown formula '{output.formula}'")
        value = FAILED_DISPLAY
    else:
        try:
            value = spec.compute(snapshot.bound(output.bind), output.params)
        except Exception as e:
            logger.error(f"Calculator {definition.id}: formula {output.formula} failed: {e}")
            value = FAILED_DISPLAY
        else:
            if isinstance(value, bool) or not isinstance(value, (int, float, str)):
                logger.error(
                    f"Calculator {definition.id}: formula {output.formula} "
                    f"returned {type(value).__name__}"
                )
                value = FAILED_DISPLAY

    return OutputResult(
        label=output.label,
        value=value,
        unit=output.unit,
        display=_display(format_value(value), output.unit),
        deterministic=deterministic,
    )


def evaluate(
    definition: CalculatorDefinition,
    raw_values: Optional[Mapping[str, Any]] = None,
    formulas: Optional[FormulaRegistry] = None,
) -> EvaluationResult:
    """Evaluate every output of a calculator in declared order.

    Never raises for user input: coercion failures become sentinels and
    formula failures become '-'.
    """
    formulas = formulas or get_formula_registry()
    snapshot = build_snapshot(definition, raw_values)
    return EvaluationResult(
        calculator_id=definition.id,
        outputs=[
            evaluate_output(definition, output, snapshot, formulas)
            for output in definition.outputs
        ],
        visible_inputs=[f.id for f in visible_fields(definition.inputs, snapshot)],
        hidden_inputs=hidden_field_ids(definition.inputs, snapshot),
    )
