"""Calculator API routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from calckit.calculators.content import resolve_content
from calckit.calculators.registry import get_calculator_registry, summarize
from calckit.calculators.schemas import (
    CalculatorCategory,
    CalculatorDefinition,
    CalculatorSummary,
    ResolvedContent,
)
from calckit.evaluation.evaluator import evaluate
from calckit.evaluation.schemas import EvaluateRequest, EvaluationResult

router = APIRouter(prefix="/calculators", tags=["calculators"])


def _get_or_404(calculator_id: str) -> CalculatorDefinition:
    calc = get_calculator_registry().get(calculator_id)
    if calc is None:
        raise HTTPException(
            status_code=404,
            detail=f"Calculator not found: {calculator_id}",
        )
    return calc


@router.get("", response_model=list[CalculatorSummary])
async def list_calculators(
    category: Optional[CalculatorCategory] = Query(
        None, description="Filter by category"
    ),
    search: Optional[str] = Query(
        None, description="Search in id, title, description, and keywords"
    ),
) -> list[CalculatorSummary]:
    """List all calculators with optional filtering."""
    registry = get_calculator_registry()

    if search:
        calculators = registry.search(search)
        if category:
            calculators = [c for c in calculators if c.category == category]
    else:
        calculators = registry.list_all(category)

    return [summarize(c) for c in calculators]


@router.get("/categories")
async def list_categories() -> dict[str, dict[str, int]]:
    """Get calculator counts by category."""
    return {"categories": get_calculator_registry().list_categories()}


@router.get("/{calculator_id}", response_model=CalculatorDefinition)
async def get_calculator(calculator_id: str) -> CalculatorDefinition:
    """Get full calculator definition."""
    return _get_or_404(calculator_id)


@router.get("/{calculator_id}/content", response_model=ResolvedContent)
async def get_calculator_content(calculator_id: str) -> ResolvedContent:
    """Get help content, with generated sections where the definition has none."""
    return resolve_content(_get_or_404(calculator_id))


@router.get("/{calculator_id}/related", response_model=list[CalculatorSummary])
async def get_related_calculators(
    calculator_id: str,
    limit: int = Query(3, ge=0, le=50, description="Maximum number of calculators"),
) -> list[CalculatorSummary]:
    """Other calculators from the same category."""
    _get_or_404(calculator_id)
    return [summarize(c) for c in get_calculator_registry().related(calculator_id, limit)]


@router.post("/{calculator_id}/evaluate", response_model=EvaluationResult)
async def evaluate_calculator(
    calculator_id: str,
    request: EvaluateRequest,
) -> EvaluationResult:
    """Evaluate every output of a calculator for the submitted values.

    Undeclared keys are ignored and untouched fields take their defaults.
    Results of non-deterministic outputs must not be cached.
    """
    return evaluate(_get_or_404(calculator_id), request.values)
