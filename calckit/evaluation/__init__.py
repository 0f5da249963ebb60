"""Evaluation module - coerces raw input and runs calculator outputs."""

from .evaluator import build_snapshot, evaluate, evaluate_output, format_value
from .schemas import EvaluateRequest, EvaluationResult, OutputResult

__all__ = [
    "EvaluateRequest",
    "EvaluationResult",
    "OutputResult",
    "build_snapshot",
    "evaluate",
    "evaluate_output",
    "format_value",
]
