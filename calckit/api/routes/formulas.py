"""Formula API routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from calckit.formulas.registry import get_formula_registry
from calckit.formulas.schemas import FormulaSummary

router = APIRouter(prefix="/formulas", tags=["formulas"])


@router.get("", response_model=list[FormulaSummary])
async def list_formulas(
    category: Optional[str] = Query(
        None, description="Filter by formula category (e.g. conversion, health)"
    ),
) -> list[FormulaSummary]:
    """List registered formulas."""
    return get_formula_registry().list_summaries(category)


@router.get("/{name}", response_model=FormulaSummary)
async def get_formula(name: str) -> FormulaSummary:
    """Get one formula's metadata."""
    registry = get_formula_registry()
    if registry.get(name) is None:
        raise HTTPException(
            status_code=404,
            detail=f"Formula not found: {name}",
        )
    category = name.split(".", 1)[0]
    return next(s for s in registry.list_summaries(category) if s.name == name)
