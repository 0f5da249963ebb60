"""Evaluation result schemas."""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class OutputResult(BaseModel):
    """One computed output, ready for display."""

    label: str
    value: Union[int, float, str] = Field(..., description="Raw formula result")
    unit: Optional[str] = None
    display: str = Field(..., description="Formatted value with its unit")
    deterministic: bool = Field(
        True,
        description="False when the value must be recomputed on every request",
    )


class EvaluationResult(BaseModel):
    """Outputs of one calculator for one input snapshot."""

    calculator_id: str
    outputs: list[OutputResult] = Field(default_factory=list)
    visible_inputs: list[str] = Field(
        default_factory=list,
        description="Input ids whose visibility condition holds for this snapshot",
    )
    hidden_inputs: list[str] = Field(
        default_factory=list,
        description="Input ids hidden for this snapshot; their values are still in the snapshot",
    )


class EvaluateRequest(BaseModel):
    """Raw user-entered values keyed by input id."""

    values: dict[str, Any] = Field(default_factory=dict)
