"""Calculators module - declarative calculator definitions.

Each calculator is a static YAML record with:
- Ordered typed input fields (with optional visibility conditions)
- Ordered outputs naming registered formulas
- SEO metadata and help content (with generated fallbacks)

Definitions are loaded once, validated against the formula registry, and
served read-only.
"""

from .content import resolve_content
from .registry import CalculatorRegistry, DuplicatePolicy, get_calculator_registry
from .schemas import (
    CalculatorCategory,
    CalculatorContent,
    CalculatorDefinition,
    CalculatorSummary,
    FaqEntry,
    OutputField,
    ResolvedContent,
    SeoMeta,
)
from .validation import IssueLevel, ValidationIssue, ValidationReport, validate_definition

__all__ = [
    "CalculatorCategory",
    "CalculatorContent",
    "CalculatorDefinition",
    "CalculatorRegistry",
    "CalculatorSummary",
    "DuplicatePolicy",
    "FaqEntry",
    "IssueLevel",
    "OutputField",
    "ResolvedContent",
    "SeoMeta",
    "ValidationIssue",
    "ValidationReport",
    "get_calculator_registry",
    "resolve_content",
    "validate_definition",
]
