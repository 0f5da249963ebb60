"""
Fields module for calculator input definitions.

This module provides:
- InputField schemas (kind, default, unit, options, visibility condition)
- Value coercion from raw form values to typed snapshot values
- The condition evaluator deciding which fields are visible
"""

from .schemas import (
    Choice,
    Condition,
    ConditionOp,
    FieldKind,
    InputField,
)

from .coercion import (
    INVALID_DATE,
    INVALID_TIME,
    MISSING,
    Sentinel,
    coerce,
    is_sentinel,
    parse_number_list,
)

from .conditions import evaluate_condition, hidden_field_ids, is_visible, visible_fields

__all__ = [
    "Choice",
    "Condition",
    "ConditionOp",
    "FieldKind",
    "InputField",
    "INVALID_DATE",
    "INVALID_TIME",
    "MISSING",
    "Sentinel",
    "coerce",
    "is_sentinel",
    "parse_number_list",
    "evaluate_condition",
    "hidden_field_ids",
    "is_visible",
    "visible_fields",
]
