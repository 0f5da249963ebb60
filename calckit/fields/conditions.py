"""Condition evaluator - decides which input fields are currently visible.

Visibility only affects rendering. A hidden field keeps its value in the
snapshot; formulas gated on the same condition must check it themselves.
"""

import logging
from typing import Any, Iterable, Mapping

from .coercion import is_sentinel, to_flag
from .schemas import Condition, ConditionOp, InputField

logger = logging.getLogger(__name__)


def _same(left: Any, right: Any) -> bool:
    """Compare a snapshot value with a declared operand.

    Numbers compare numerically so that a select value "2" matches an
    operand of 2; everything else compares by string form.
    """
    if is_sentinel(left):
        return False
    if isinstance(left, bool):
        return left == to_flag(right)
    try:
        return float(left) == float(right)
    except (TypeError, ValueError, OverflowError):
        return str(left) == str(right)


def evaluate_condition(condition: Condition, snapshot: Mapping[str, Any]) -> bool:
    """Evaluate a condition against a snapshot of coerced values.

    Total: a missing sibling or an uncomparable value yields False.
    """
    if condition.all_of:
        return all(evaluate_condition(child, snapshot) for child in condition.all_of)
    if condition.any_of:
        return any(evaluate_condition(child, snapshot) for child in condition.any_of)

    if condition.field not in snapshot:
        logger.debug(f"Condition reads unknown field: {condition.field}")
        return False
    current = snapshot[condition.field]

    op = condition.op
    if op == ConditionOp.TRUTHY:
        return bool(current) and not is_sentinel(current)
    if op == ConditionOp.FALSY:
        return not current or is_sentinel(current)
    if op == ConditionOp.EQUALS:
        return _same(current, condition.value)
    if op == ConditionOp.NOT_EQUALS:
        return not is_sentinel(current) and not _same(current, condition.value)
    if op == ConditionOp.IN:
        return any(_same(current, item) for item in condition.value)
    if op == ConditionOp.NOT_IN:
        return not is_sentinel(current) and not any(_same(current, item) for item in condition.value)
    return False


def is_visible(field: InputField, snapshot: Mapping[str, Any]) -> bool:
    """Whether a field should be rendered for the given snapshot."""
    if field.condition is None:
        return True
    return evaluate_condition(field.condition, snapshot)


def visible_fields(
    fields: Iterable[InputField],
    snapshot: Mapping[str, Any],
) -> list[InputField]:
    """Ordered list of fields visible for the given snapshot."""
    return [f for f in fields if is_visible(f, snapshot)]


def hidden_field_ids(
    fields: Iterable[InputField],
    snapshot: Mapping[str, Any],
) -> list[str]:
    """Ids of the fields a renderer should not show for the given snapshot."""
    return [f.id for f in fields if not is_visible(f, snapshot)]
